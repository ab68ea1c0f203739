# src/domain/identity/models.py
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_EXTRA_CLAIMS = 16
MAX_CLAIM_KEY_LEN = 64

ClaimValue = Union[str, int, float, bool, None]


class VerifiedIdentity(BaseModel):
    """
    Already-verified session identity handed over by upstream request handling.
    Known fields are typed; anything else must fit in `extra_claims`.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)
    id: str
    email: Optional[str] = None
    is_pro: bool = False
    subscription_plan: Optional[str] = None
    has_active_access: bool = False
    is_in_trial: bool = False
    extra_claims: Dict[str, ClaimValue] = Field(default_factory=dict)

    @field_validator("extra_claims")
    @classmethod
    def _bounded(cls, v: Dict[str, ClaimValue]) -> Dict[str, ClaimValue]:
        if len(v) > MAX_EXTRA_CLAIMS:
            raise ValueError(f"too many extra claims ({len(v)} > {MAX_EXTRA_CLAIMS})")
        for k in v:
            if not k or len(k) > MAX_CLAIM_KEY_LEN:
                raise ValueError(f"invalid claim key: {k!r}")
        return v
