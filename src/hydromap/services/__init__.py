"""
Shared utilities used by every data source.

- http.py      - requests.Session with default timeout, no automatic retries
- fallback.py  - primary -> fallback query combinator
"""
