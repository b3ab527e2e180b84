"""Batch-level context shared by every item of one auction round."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class GdprConsent:
    """
    GDPR consent as received from the consent management module.

    consent_string and gdpr_applies are independent signals: a consent
    string may arrive without any applicability flag. Numeric flags (0/1)
    sent by some CMPs are read as booleans; anything else means unknown.
    """
    consent_string: Optional[str] = None
    gdpr_applies: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GdprConsent":
        applies = data.get('gdprApplies')
        if not isinstance(applies, bool):
            applies = bool(applies) if isinstance(applies, int) and applies in (0, 1) else None
        return cls(
            consent_string=data.get('consentString'),
            gdpr_applies=applies,
        )


@dataclass
class RefererInfo:
    """Page information detected by the orchestrator."""
    page: Optional[str] = None
    domain: Optional[str] = None
    ref: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RefererInfo":
        return cls(
            page=data.get('page'),
            domain=data.get('domain'),
            ref=data.get('ref'),
        )


@dataclass
class BatchContext:
    """
    Values shared by every item in one outbound message.

    ortb2 carries first-party data (site, device, source, ...) already
    shaped as OpenRTB objects by the orchestrator.
    """

    gdpr_consent: Optional[GdprConsent] = None
    usp_consent: Optional[str] = None
    referer_info: Optional[RefererInfo] = None
    timeout: Optional[int] = None
    ortb2: dict[str, Any] = field(default_factory=dict)
    auction_id: Optional[str] = None

    # Explicit settlement currency; None means "use configuration"
    currency: Optional[str] = None

    @property
    def page(self) -> Optional[str]:
        """Referer page URL, if known."""
        if self.referer_info:
            return self.referer_info.page
        return None

    @property
    def declared_page(self) -> Optional[str]:
        """Page URL already declared in first-party site data."""
        return (self.ortb2.get('site') or {}).get('page')

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "BatchContext":
        """Create from the orchestrator's bidderRequest dict."""
        if not data:
            return cls()

        gdpr = data.get('gdprConsent')
        referer = data.get('refererInfo')
        return cls(
            gdpr_consent=GdprConsent.from_dict(gdpr) if gdpr else None,
            usp_consent=data.get('uspConsent'),
            referer_info=RefererInfo.from_dict(referer) if referer else None,
            timeout=data.get('timeout'),
            ortb2=data.get('ortb2') or {},
            auction_id=data.get('auctionId'),
            currency=data.get('currency'),
        )
