"""
Chat package - accounting assistant completions over the caller's own data.
"""
