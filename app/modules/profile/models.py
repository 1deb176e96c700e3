# Supabase table: profiles, Supabase Storage bucket: avatars
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, default: gen_random_uuid())
- user_id: uuid (unique, references auth.users.id, not null)
- first_name: text (nullable)
- last_name: text (nullable)
- gender: text (nullable)
- avatar_url: text (nullable) - public URL in the avatars bucket
- date_of_birth: date (nullable)
- partner_id: uuid (nullable, references auth.users.id) - set only by the invite flow
- couple_id: uuid (nullable) - shared by both partners, set only by the invite flow
- relationship_start_date: date (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

A profile row is created lazily on the first PATCH /profile or avatar upload.
Avatar objects are stored at <user_id>/<epoch-ms>.<ext>.
"""
