"""
Invite codes and couple pairing.

Pairing is a sequence of independent PostgREST calls, not a transaction.
When a write fails after the profiles have been touched, both profiles are
reset with compensating writes. If a compensating write fails too the pair
can be left half-linked; that case is logged at ERROR for manual repair.
Two requests racing on the same code can both pass the unused check. The
conditional consume at the end narrows that window but does not close it.
"""

import secrets
import string
import uuid
from supabase import Client
from fastapi import HTTPException
from datetime import datetime, timedelta, timezone
from app.modules.invites.schemas import InviteCodeResponse, PartnerSummary, PartnerResponse, PairingResponse
from app.modules.profile.service import ProfileService
from app.core.user_scoped_service import utc_now_iso
from app.config import settings
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits
MAX_CODE_ATTEMPTS = 5


def generate_code(length: int) -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def normalize_code(code: str) -> str:
    return code.strip().upper()


def parse_timestamp(value: Any) -> datetime:
    """Supabase returns ISO strings; naive values are taken as UTC"""
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def partner_summary(user_id: str, profile: Optional[Dict[str, Any]]) -> PartnerSummary:
    profile = profile or {}
    return PartnerSummary(
        id=user_id,
        first_name=profile.get("first_name"),
        last_name=profile.get("last_name"),
        avatar=profile.get("avatar_url"),
    )


class InviteService:
    def __init__(self, supabase: Client, profiles: Optional[ProfileService] = None):
        self.supabase = supabase
        self.profiles = profiles or ProfileService(supabase)

    def _find_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        try:
            return self.profiles.find_profile(user_id)
        except Exception as e:
            logger.error(f"Error fetching profile for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Could not fetch profile data")

    def _find_invite(self, code: str) -> Optional[Dict[str, Any]]:
        try:
            result = self.supabase.table("invite_codes")\
                .select("*")\
                .eq("code", code)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error looking up invite code {code}: {e}")
            raise HTTPException(status_code=500, detail="Could not validate invite code")
        return result.data[0] if result.data else None

    def _consume(self, code: str, user_id: str) -> bool:
        """Mark the code used, only if nobody used it first. True if this call won."""
        result = self.supabase.table("invite_codes")\
            .update({"used_by": user_id, "used_at": utc_now_iso()})\
            .eq("code", code)\
            .is_("used_by", "null")\
            .execute()
        return bool(result.data)

    def _reset_pairing(self, couple_id: str, *user_ids: str) -> None:
        # Only rows still carrying this couple_id were written by this request
        for user_id in user_ids:
            try:
                self.supabase.table("profiles")\
                    .update({"partner_id": None, "couple_id": None, "updated_at": utc_now_iso()})\
                    .eq("user_id", user_id)\
                    .eq("couple_id", couple_id)\
                    .execute()
            except Exception as e:
                logger.error(f"Rollback of pairing failed for {user_id}, profile needs manual repair: {e}")

    def create_code(self, user_id: str) -> InviteCodeResponse:
        """Issue a new single-use code for the caller to share with a partner"""
        profile = self._find_profile(user_id)
        if profile and profile.get("partner_id"):
            raise HTTPException(status_code=400, detail="You are already paired with a partner")

        expires_at = datetime.now(timezone.utc) + timedelta(days=settings.invite_code_ttl_days)
        try:
            for _ in range(MAX_CODE_ATTEMPTS):
                code = generate_code(settings.invite_code_length)
                if self._find_invite(code):
                    continue
                result = self.supabase.table("invite_codes").insert({
                    "code": code,
                    "created_by": user_id,
                    "expires_at": expires_at.isoformat(),
                }).execute()
                if not result.data:
                    logger.error(f"Invite code insert for {user_id} returned no row")
                    raise HTTPException(status_code=500, detail="Could not generate invite code")
                row = result.data[0]
                logger.info(f"Invite code issued by {user_id}")
                return InviteCodeResponse(code=row["code"], expires_at=parse_timestamp(row["expires_at"]))
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating invite code for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Could not generate invite code")
        logger.error(f"Could not find a free invite code for {user_id} after {MAX_CODE_ATTEMPTS} attempts")
        raise HTTPException(status_code=500, detail="Could not generate invite code")

    def use_code(self, user_id: str, raw_code: str) -> PairingResponse:
        """Pair the caller with the code's creator"""
        code = normalize_code(raw_code)

        me = self._find_profile(user_id)
        if me and me.get("partner_id"):
            raise HTTPException(status_code=400, detail="You are already paired with a partner")

        invite = self._find_invite(code)
        if not invite:
            raise HTTPException(status_code=404, detail="Invite code not found")
        if parse_timestamp(invite["expires_at"]) <= datetime.now(timezone.utc):
            raise HTTPException(status_code=400, detail="Invite code has expired")
        if invite.get("used_by"):
            raise HTTPException(status_code=400, detail="Invite code has already been used")
        creator_id = invite["created_by"]
        if creator_id == user_id:
            raise HTTPException(status_code=400, detail="You cannot use your own invite code")

        creator = self._find_profile(creator_id)
        if creator and creator.get("partner_id"):
            # The code can never succeed now; burn it so it is not retried
            try:
                self._consume(code, user_id)
            except Exception as e:
                logger.warning(f"Could not mark invite code {code} as used: {e}")
            raise HTTPException(status_code=400, detail="The user who created this code is already paired")

        couple_id = str(uuid.uuid4())
        try:
            self.profiles.save_profile(user_id, {"partner_id": creator_id, "couple_id": couple_id})
            creator_row, _ = self.profiles.save_profile(creator_id, {"partner_id": user_id, "couple_id": couple_id})
            if not self._consume(code, user_id):
                raise RuntimeError(f"Invite code {code} was consumed by another request")
        except Exception as e:
            logger.error(f"Pairing {user_id} with {creator_id} failed, rolling back: {e}")
            self._reset_pairing(couple_id, user_id, creator_id)
            raise HTTPException(status_code=500, detail="Could not complete pairing")

        logger.info(f"Paired {user_id} with {creator_id} as couple {couple_id}")
        return PairingResponse(
            message="Pairing successful",
            couple_id=couple_id,
            partner=partner_summary(creator_id, creator_row),
        )

    def get_partner(self, user_id: str) -> PartnerResponse:
        me = self._find_profile(user_id)
        if not me or not me.get("partner_id"):
            raise HTTPException(status_code=404, detail="You are not paired with a partner")
        partner = self._find_profile(me["partner_id"])
        return PartnerResponse(
            couple_id=me["couple_id"],
            partner=partner_summary(me["partner_id"], partner),
        )

    def unpair(self, user_id: str) -> None:
        """Clear the pairing on both profiles"""
        me = self._find_profile(user_id)
        if not me or not me.get("partner_id"):
            raise HTTPException(status_code=400, detail="You are not paired with a partner")
        partner_id = me["partner_id"]
        cleared = {"partner_id": None, "couple_id": None, "updated_at": utc_now_iso()}
        try:
            self.supabase.table("profiles")\
                .update(cleared)\
                .eq("user_id", user_id)\
                .execute()
            # Only touch the partner if it still points back at the caller
            self.supabase.table("profiles")\
                .update(cleared)\
                .eq("user_id", partner_id)\
                .eq("partner_id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error unpairing {user_id} from {partner_id}: {e}")
            raise HTTPException(status_code=500, detail="Could not remove pairing")
        logger.info(f"Unpaired {user_id} from {partner_id}")
