"""AniQueue - match free-form anime names against the AniList catalog."""

from aniqueue.shared.constants import Application

__version__ = Application.VERSION
