"""
Authentication subsystem.

Components:
- identity.py: client for the hosted (Supabase-style) identity provider
- login.py: sign-in / registration form flow (validation, notifications, redirect)
"""
