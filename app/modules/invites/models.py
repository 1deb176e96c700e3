# Supabase table: invite_codes
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, default: gen_random_uuid())
- code: text (unique, not null) - 6 characters, A-Z0-9
- created_by: uuid (references auth.users.id, not null)
- used_by: uuid (nullable, references auth.users.id)
- used_at: timestamp (nullable)
- expires_at: timestamp (not null) - created_at + 7 days
- created_at: timestamp (default: now())

A code is consumed exactly once: the consuming update is filtered on
used_by IS NULL. Pairing writes partner_id/couple_id on both rows of the
profiles table (see modules/profile/models.py).
"""
