"""Source platform lookups."""

from clipbot_core.platforms.twitch import (
    TwitchAPIError,
    TwitchClient,
    TwitchStream,
    TwitchUser,
    extract_channel_name,
    get_stream_thumbnail,
)

__all__ = [
    "TwitchAPIError",
    "TwitchClient",
    "TwitchStream",
    "TwitchUser",
    "extract_channel_name",
    "get_stream_thumbnail",
]
