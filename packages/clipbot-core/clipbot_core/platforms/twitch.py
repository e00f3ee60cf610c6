"""Twitch channel and stream lookups."""

import logging
import re
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

HELIX_URL = "https://api.twitch.tv/helix"

_CHANNEL = re.compile(r"twitch\.tv/([^/?#]+)")


class TwitchAPIError(Exception):
    """Helix answered with an error or could not be reached."""


@dataclass
class TwitchStream:
    """A live stream as reported by Helix."""

    id: str
    user_id: str
    user_name: str
    user_login: str
    game_name: str = ""
    type: str = ""  # "live" or ""
    title: str = ""
    viewer_count: int = 0
    started_at: str = ""
    language: str = ""
    thumbnail_url: str = ""
    is_mature: bool = False
    placeholder: bool = False

    @property
    def is_live(self) -> bool:
        return self.type == "live"

    @classmethod
    def from_dict(cls, data: dict) -> "TwitchStream":
        return cls(
            id=str(data.get("id", "")),
            user_id=str(data.get("user_id", "")),
            user_name=data.get("user_name", ""),
            user_login=data.get("user_login", ""),
            game_name=data.get("game_name", ""),
            type=data.get("type", ""),
            title=data.get("title", ""),
            viewer_count=int(data.get("viewer_count", 0)),
            started_at=data.get("started_at", ""),
            language=data.get("language", ""),
            thumbnail_url=data.get("thumbnail_url", ""),
            is_mature=bool(data.get("is_mature", False)),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class TwitchUser:
    """A Twitch account as reported by Helix."""

    id: str
    login: str
    display_name: str
    type: str = ""
    broadcaster_type: str = ""
    description: str = ""
    profile_image_url: str = ""
    offline_image_url: str = ""
    view_count: int = 0
    created_at: str = ""
    placeholder: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "TwitchUser":
        return cls(
            id=str(data.get("id", "")),
            login=data.get("login", ""),
            display_name=data.get("display_name", ""),
            type=data.get("type", ""),
            broadcaster_type=data.get("broadcaster_type", ""),
            description=data.get("description", ""),
            profile_image_url=data.get("profile_image_url", ""),
            offline_image_url=data.get("offline_image_url", ""),
            view_count=int(data.get("view_count", 0)),
            created_at=data.get("created_at", ""),
        )

    def to_dict(self) -> dict:
        return asdict(self)


def extract_channel_name(url: str) -> Optional[str]:
    """Channel login from a ``twitch.tv/<channel>`` URL."""
    match = _CHANNEL.search(url or "")
    return match.group(1) if match else None


def get_stream_thumbnail(thumbnail_url: str, width: int = 320, height: int = 180) -> str:
    """Fill the ``{width}``/``{height}`` placeholders of a Helix thumbnail URL."""
    return thumbnail_url.replace("{width}", str(width)).replace("{height}", str(height))


def _profile_image(channel: str) -> str:
    return f"https://static-cdn.jtvnw.net/jtv_user_pictures/{channel}-profile_image-70x70.png"


class TwitchClient:
    """
    Minimal Helix client.

    Without both a client ID and an app access token it runs in demo mode:
    lookups return a placeholder record built from the channel name and
    never touch the network.
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        access_token: Optional[str] = None,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        self.client_id = client_id
        self.access_token = access_token
        self._client = client or httpx.Client(base_url=HELIX_URL, timeout=timeout)

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id and self.access_token)

    def close(self) -> None:
        self._client.close()

    def _get_first(self, path: str, params: dict) -> Optional[dict]:
        headers = {
            "Client-Id": self.client_id,
            "Authorization": f"Bearer {self.access_token}",
        }
        try:
            response = self._client.get(path, params=params, headers=headers)
        except httpx.HTTPError as e:
            raise TwitchAPIError(f"Twitch API unreachable: {e}") from e

        if response.is_error:
            raise TwitchAPIError(f"Twitch API error: {response.reason_phrase}")

        try:
            items = response.json().get("data") or []
        except (ValueError, AttributeError) as e:
            raise TwitchAPIError("Twitch API returned invalid JSON") from e
        return items[0] if items else None

    def get_stream_info(self, channel: str) -> Optional[TwitchStream]:
        """Current stream of a channel, or None when it is offline."""
        if not self.has_credentials:
            logger.debug("twitch.placeholder", extra={"channel": channel, "lookup": "stream"})
            return TwitchStream(
                id="placeholder-stream-id",
                user_id="placeholder-user-id",
                user_name=channel,
                user_login=channel.lower(),
                game_name="Just Chatting",
                type="live",
                title=f"{channel} is live! Come hang out!",
                started_at=datetime.now(timezone.utc).isoformat(),
                language="en",
                thumbnail_url=_profile_image(channel),
                placeholder=True,
            )

        data = self._get_first("/streams", {"user_login": channel})
        return TwitchStream.from_dict(data) if data else None

    def get_user_info(self, channel: str) -> Optional[TwitchUser]:
        """Account details of a channel, or None when it does not exist."""
        if not self.has_credentials:
            logger.debug("twitch.placeholder", extra={"channel": channel, "lookup": "user"})
            return TwitchUser(
                id="placeholder-user-id",
                login=channel.lower(),
                display_name=channel,
                type="user",
                description="Welcome to my stream!",
                profile_image_url=_profile_image(channel),
                created_at=datetime.now(timezone.utc).isoformat(),
                placeholder=True,
            )

        data = self._get_first("/users", {"login": channel})
        return TwitchUser.from_dict(data) if data else None
