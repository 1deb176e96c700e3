# Supabase table: photos, Supabase Storage bucket: photos
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, default: gen_random_uuid())
- user_id: uuid (foreign key to auth.users.id, not null)
- title: text (not null)
- description: text (nullable)
- url: text (not null) - public URL of the object in the photos bucket
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Storage layout (public bucket): <user_id>/<epoch-ms>.<ext>
"""
