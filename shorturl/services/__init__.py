"""
Services module for business logic separation.

- registry: the short code <-> URL mapping (register, lookup)
- url_service: validation, DNS check and registration for new URLs
- redirect_service: resolves a requested code to its URL
- reachability: the DNS reachability check
"""
