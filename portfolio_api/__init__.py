"""
HTTP gateway for portfolio website content.

Public read routes, a contact form, and a token-guarded admin CMS, all
backed by a hosted database/auth service (Supabase).
"""
