# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User registration (auth.users table)
# - Login and session management
# - JWT issuance and validation
# - Password hashing and reset emails

"""
Supabase Auth calls used here:
- auth.sign_up() - Register new users (first/last name kept in user_metadata)
- auth.sign_in_with_password() - Authenticate users
- auth.reset_password_for_email() - Send a password reset link
- auth.get_user() - Resolve the user behind a bearer token
- auth.sign_out() - Logout users

Application data about a user lives in the profiles table (see modules/profile/models.py).
"""
