"""Authentication and authorization.

Learn: Users register/login with email + password and receive a signed
JWT. Every protected request presents it as a Bearer token; the token's
`sub` claim is the only source of the caller's identity, and that
identity scopes every subscription query.
"""
