"""
Supply Chain serialization.

Per IAB OpenRTB Supply Chain spec:
https://iabtechlab.com/standards/openrtb-supply-chain/

Two wire forms are produced:
- the OpenRTB object (source.ext.schain) for structured requests
- the compact "ver,complete!node!node" string for the legacy endpoint
"""

import json
from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import quote

# Characters left unescaped by JavaScript's encodeURIComponent
_URI_COMPONENT_SAFE = "-_.!~*'()"


@dataclass
class SupplyChainNode:
    """
    Supply Chain node.

    Attributes:
        asi: Canonical domain name of the SSP, Exchange, Header Wrapper, etc.
        sid: Identifier associated with the seller or reseller account.
        hp: Indicates if this node is involved in payment flow (1=yes, 0=no).
        rid: Optional request ID issued by this node.
        name: Optional human-readable name of the entity.
        domain: Optional domain of the entity (may differ from asi).
        ext: Optional extension object for custom data.
    """
    asi: Optional[str] = None
    sid: Optional[str] = None
    hp: Optional[int] = None
    rid: Optional[str] = None
    name: Optional[str] = None
    domain: Optional[str] = None
    ext: dict[str, Any] = field(default_factory=dict)

    def to_dict(self, fields: list[str]) -> dict[str, Any]:
        """Serialize the listed fields, in order, skipping empty ones."""
        result = {}
        for name in fields:
            value = getattr(self, name, None)
            if value is None or value == {}:
                continue
            result[name] = value
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SupplyChainNode":
        """Create from dictionary."""
        return cls(
            asi=data.get("asi"),
            sid=data.get("sid"),
            hp=data.get("hp"),
            rid=data.get("rid"),
            name=data.get("name"),
            domain=data.get("domain"),
            ext=data.get("ext") or {},
        )


def _is_complete_chain(schain: Any) -> bool:
    return (
        isinstance(schain, dict)
        and "ver" in schain
        and "complete" in schain
        and isinstance(schain.get("nodes"), list)
    )


def normalize_supply_chain(
    schain: Optional[dict[str, Any]],
    fields: list[str],
) -> Optional[dict[str, Any]]:
    """
    Build the OpenRTB schain object with nodes restricted to `fields`.

    Returns None when the chain is missing or lacks ver/complete/nodes.
    """
    if not _is_complete_chain(schain):
        return None

    result: dict[str, Any] = {
        "ver": schain["ver"],
        "complete": schain["complete"],
        "nodes": [
            SupplyChainNode.from_dict(node).to_dict(fields)
            for node in schain["nodes"]
            if isinstance(node, dict)
        ],
    }
    if schain.get("ext"):
        result["ext"] = schain["ext"]
    return result


def _encode_value(value: Any) -> str:
    if not value:
        return ""
    if isinstance(value, (dict, list)):
        value = json.dumps(value, separators=(",", ":"))
    return quote(str(value), safe=_URI_COMPONENT_SAFE)


def serialize_supply_chain(
    schain: Optional[dict[str, Any]],
    fields: list[str],
) -> Optional[str]:
    """
    Serialize a chain to the compact string form.

    Example:
        "1.0,1!exchange1.com,1234,1,bid-request-1,publisher,publisher.com,"
    """
    if not _is_complete_chain(schain):
        return None

    serialized = f"{schain['ver']},{schain['complete']}"
    for node in schain["nodes"]:
        if not isinstance(node, dict):
            node = {}
        serialized += "!" + ",".join(_encode_value(node.get(name)) for name in fields)
    return serialized
