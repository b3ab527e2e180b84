"""User sync pixel URLs."""

from .user_sync import UserSync, build_sync_url, get_user_syncs

__all__ = ['UserSync', 'build_sync_url', 'get_user_syncs']
