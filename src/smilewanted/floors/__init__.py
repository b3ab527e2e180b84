"""Floor price resolution."""

from .floor_resolver import get_module_floor, get_param_floor, resolve_floor

__all__ = ['get_module_floor', 'get_param_floor', 'resolve_floor']
