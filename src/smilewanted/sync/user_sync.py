"""
User sync pixels.

The endpoint syncs through a single iframe. Consent signals are appended
to its URL only when present.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union
from urllib.parse import quote

from ..config.adapter_config import AdapterConfig, get_adapter_config
from ..models.batch_context import GdprConsent


@dataclass
class UserSync:
    """A sync pixel for the orchestrator to drop."""
    type: str
    url: str

    def to_dict(self) -> dict[str, str]:
        return {'type': self.type, 'url': self.url}


def build_sync_url(
    base_url: str,
    gdpr_consent: Optional[GdprConsent] = None,
    usp_consent: Optional[str] = None,
) -> str:
    """
    Append consent query parameters to the sync URL.

    gdpr is added only when gdprApplies is a boolean; a consent string
    without it is sent alone.
    """
    params = []

    if gdpr_consent is not None and isinstance(gdpr_consent.consent_string, str):
        if isinstance(gdpr_consent.gdpr_applies, bool):
            params.append(
                f"gdpr={int(gdpr_consent.gdpr_applies)}&gdpr_consent={gdpr_consent.consent_string}"
            )
        else:
            params.append(f"gdpr_consent={gdpr_consent.consent_string}")

    if usp_consent:
        params.append(f"us_privacy={quote(usp_consent, safe='')}")

    return base_url + ('?' + '&'.join(params) if params else '')


def get_user_syncs(
    sync_options: dict[str, Any],
    responses: Any = None,
    gdpr_consent: Union[GdprConsent, dict[str, Any], None] = None,
    usp_consent: Optional[str] = None,
    config: Optional[AdapterConfig] = None,
) -> list[UserSync]:
    """
    Register the user syncs to drop after the auction.

    Args:
        sync_options: Which sync types are allowed ({'iframeEnabled': bool, ...})
        responses: Server responses (unused; syncs do not depend on bids)
        gdpr_consent: GDPR consent, as a model or the orchestrator's dict
        usp_consent: US Privacy string

    Returns:
        List with one iframe sync, or empty if iframes are not allowed
    """
    if not (sync_options or {}).get('iframeEnabled'):
        return []

    if isinstance(gdpr_consent, dict):
        gdpr_consent = GdprConsent.from_dict(gdpr_consent)

    config = config or get_adapter_config()
    return [
        UserSync(
            type='iframe',
            url=build_sync_url(config.sync_url, gdpr_consent, usp_consent),
        )
    ]
