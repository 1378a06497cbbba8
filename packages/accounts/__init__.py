"""
Accounts package - the application-side record of a signed-up user and the
billing customer it maps to.
"""
