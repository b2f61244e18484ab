from typing import Any, Iterable

from pydantic import NonNegativeInt

from .._utils import BodyEncoding, Endpoint, HttpMethod
from ..models.errors import UnknownEndpointError
from ._spec import Api, AuthScheme, EndpointSpec, Param, optional, required

GET = HttpMethod.GET
POST = HttpMethod.POST
DELETE = HttpMethod.DELETE

Metadata = dict[str, Any]


def _round_two_places(value: float) -> float:
    return round(value, 2)


def _token(name: str, grant_type: str, *params: Param) -> EndpointSpec:
    return EndpointSpec(
        name=name,
        method=POST,
        path=Endpoint("/oauth/access"),
        params=params,
        api=Api.LOGIN,
        auth=AuthScheme.BASIC,
        encoding=BodyEncoding.FORM,
        fixed={"grant_type": grant_type},
    )


def _control(
    name: str,
    method: HttpMethod,
    path: str,
    *params: Param,
    encoding: BodyEncoding = BodyEncoding.JSON,
) -> EndpointSpec:
    return EndpointSpec(
        name=name,
        method=method,
        path=Endpoint(path),
        params=params,
        encoding=encoding,
    )


def _subscription(name: str, path: str) -> list[EndpointSpec]:
    return [
        _control(f"subscribe_{name}", POST, f"{path}/subscription"),
        _control(f"unsubscribe_{name}", DELETE, f"{path}/subscription"),
    ]


_HOUSEHOLD = "/households/{householdId}"
_GROUP = "/groups/{groupId}"
_SESSION = "/playbackSessions/{sessionId}/playbackSession"
_PLAYER = "/players/{playerId}"

AUTHORIZATION = [
    _token(
        "create_token",
        "authorization_code",
        required("code", keyword_override="authorization_code"),
        required("redirect_uri"),
    ),
    _token("refresh_token", "refresh_token", required("refresh_token")),
]

HOUSEHOLDS = [
    _control("get_households", GET, "/households"),
]

GROUPS = [
    _control("get_groups", GET, f"{_HOUSEHOLD}/groups"),
    _control(
        "create_group",
        POST,
        f"{_HOUSEHOLD}/groups/createGroup",
        required("playerIds", list[str]),
        optional("musicContextGroupId"),
    ),
    _control(
        "set_group_members",
        POST,
        f"{_HOUSEHOLD}/groups/setGroupMembers",
        required("playerIds", list[str]),
    ),
    _control(
        "modify_group_members",
        POST,
        f"{_GROUP}/groups/modifyGroupMembers",
        required("playerIdsToAdd", list[str]),
        required("playerIdsToRemove", list[str]),
    ),
    *_subscription("groups", f"{_HOUSEHOLD}/groups"),
]

GROUP_VOLUME = [
    _control("get_group_volume", GET, f"{_GROUP}/groupVolume"),
    _control("set_group_volume", POST, f"{_GROUP}/groupVolume", required("volume", int)),
    _control(
        "set_group_relative_volume",
        POST,
        f"{_GROUP}/groupVolume/relative",
        required("volumeDelta", int),
    ),
    _control("set_group_mute", POST, f"{_GROUP}/groupVolume/mute", required("muted", bool)),
    *_subscription("group_volume", f"{_GROUP}/groupVolume"),
]

PLAYBACK = [
    _control("get_playback_status", GET, f"{_GROUP}/playback"),
    _control("play", POST, f"{_GROUP}/playback/play"),
    _control("pause", POST, f"{_GROUP}/playback/pause"),
    _control("toggle_play_pause", POST, f"{_GROUP}/playback/togglePlayPause"),
    _control("skip_to_next_track", POST, f"{_GROUP}/playback/skipToNextTrack"),
    _control("skip_to_previous_track", POST, f"{_GROUP}/playback/skipToPreviousTrack"),
    _control(
        "load_line_in",
        POST,
        f"{_GROUP}/playback/lineIn",
        optional("deviceId"),
        optional("playOnCompletion", bool),
    ),
    _control(
        "seek",
        POST,
        f"{_GROUP}/playback/seek",
        required("positionMillis", NonNegativeInt),
        optional("itemId"),
    ),
    _control(
        "seek_relative",
        POST,
        f"{_GROUP}/playback/seekRelative",
        required("deltaMillis", int),
        optional("itemId"),
    ),
    _control(
        "set_play_modes",
        POST,
        f"{_GROUP}/playback/playMode",
        required("playModes", list[str]),
    ),
    *_subscription("playback", f"{_GROUP}/playback"),
]

PLAYBACK_METADATA = [
    _control("get_playback_metadata", GET, f"{_GROUP}/playbackMetadata"),
    *_subscription("playback_metadata", f"{_GROUP}/playbackMetadata"),
]

PLAYBACK_SESSIONS = [
    _control(
        "create_session",
        POST,
        f"{_GROUP}/playbackSession/create",
        required("appContext"),
        required("appId"),
        optional("accountId"),
        optional("customData"),
    ),
    _control(
        "join_session",
        POST,
        f"{_GROUP}/playbackSession/join",
        required("appId"),
        required("appContext"),
    ),
    _control(
        "join_or_create_session",
        POST,
        f"{_GROUP}/playbackSession/joinOrCreate",
        required("appId"),
        required("appContext"),
        optional("accountId"),
        optional("customData"),
    ),
    _control(
        "load_cloud_queue",
        POST,
        f"{_SESSION}/loadCloudQueue",
        required("queueBaseUrl"),
        optional("httpAuthorization"),
        optional("itemId"),
        optional("playOnCompletion", bool),
        optional("positionMillis", NonNegativeInt),
        optional("queueVersion"),
        optional("trackMetadata", Metadata),
        optional("useHttpAuthorizationForMedia", bool),
    ),
    _control(
        "load_stream_url",
        POST,
        f"{_SESSION}/loadStreamUrl",
        required("streamUrl"),
        optional("itemId"),
        optional("playOnCompletion", bool),
        optional("stationMetadata", Metadata),
    ),
    _control("refresh_cloud_queue", POST, f"{_SESSION}/refreshCloudQueue"),
    _control(
        "session_seek",
        POST,
        f"{_SESSION}/seek",
        required("itemId"),
        required("positionMillis", NonNegativeInt),
    ),
    _control(
        "skip_to_item",
        POST,
        f"{_SESSION}/skipToItem",
        required("itemId"),
        optional("playOnCompletion", bool),
        optional("positionMillis", NonNegativeInt),
        optional("queueVersion"),
        optional("trackMetadata", Metadata),
    ),
    _control("suspend_session", POST, f"{_SESSION}/suspend", optional("queueVersion")),
    *_subscription("session", _SESSION),
]

FAVORITES = [
    _control("get_favorites", GET, f"{_HOUSEHOLD}/favorites"),
    _control(
        "load_favorite",
        POST,
        f"{_GROUP}/favorites",
        required("favoriteId"),
        optional("action"),
        optional("playOnCompletion", bool),
        optional("playModes", list[str]),
    ),
    *_subscription("favorites", f"{_HOUSEHOLD}/favorites"),
]

PLAYLISTS = [
    _control("get_playlists", GET, f"{_HOUSEHOLD}/playlists"),
    _control(
        "get_playlist",
        POST,
        f"{_HOUSEHOLD}/playlists/getPlaylist",
        required("playlistId"),
    ),
    _control(
        "load_playlist",
        POST,
        f"{_GROUP}/playlists",
        required("playlistId"),
        optional("action"),
        optional("playOnCompletion", bool),
        optional("playModes", list[str]),
    ),
    *_subscription("playlists", f"{_HOUSEHOLD}/playlists"),
]

MUSIC_SERVICE_ACCOUNTS = [
    _control(
        "match_music_service_account",
        POST,
        f"{_HOUSEHOLD}/musicServiceAccounts/match",
        required("userIdHashCode"),
        required("nickname"),
        required("serviceId"),
        optional("linkCode"),
        optional("linkDeviceId"),
    ),
]

AUDIO_CLIP = [
    _control(
        "load_audio_clip",
        POST,
        f"{_PLAYER}/audioClip",
        required("appId"),
        required("name"),
        optional("clipType"),
        optional("httpAuthorization"),
        optional("priority"),
        optional("streamUrl"),
        optional("volume", int),
    ),
    _control(
        "cancel_audio_clip",
        DELETE,
        f"{_PLAYER}/audioClip/{{clipId}}",
        encoding=BodyEncoding.NONE,
    ),
    *_subscription("audio_clip", f"{_PLAYER}/audioClip"),
]

HOME_THEATER = [
    _control("load_home_theater_playback", POST, f"{_PLAYER}/homeTheater"),
    _control("get_home_theater_options", GET, f"{_PLAYER}/homeTheater/options"),
    _control(
        "set_home_theater_options",
        POST,
        f"{_PLAYER}/homeTheater/options",
        optional("nightMode", bool),
        optional("enhanceDialog", bool),
    ),
    _control(
        "set_tv_power_state",
        POST,
        f"{_PLAYER}/homeTheater/tvPowerState",
        required("tvPowerState"),
    ),
]

PLAYER_SETTINGS = [
    _control("get_player_settings", GET, f"{_PLAYER}/settings/player"),
    _control(
        "set_player_settings",
        POST,
        f"{_PLAYER}/settings/player",
        optional("volumeMode"),
        optional("volumeScalingFactor", float, transform=_round_two_places),
        optional("monoMode", bool),
        optional("wifiDisable", bool),
    ),
]

PLAYER_VOLUME = [
    _control("get_player_volume", GET, f"{_PLAYER}/playerVolume"),
    _control(
        "set_player_volume",
        POST,
        f"{_PLAYER}/playerVolume",
        optional("volume", int),
        optional("muted", bool),
    ),
    _control("set_player_mute", POST, f"{_PLAYER}/playerVolume", required("muted", bool)),
    _control(
        "set_player_relative_volume",
        POST,
        f"{_PLAYER}/playerVolume/relative",
        required("volumeDelta", int),
    ),
    *_subscription("player_volume", f"{_PLAYER}/playerVolume"),
]


def _index(*groups: Iterable[EndpointSpec]) -> dict[str, EndpointSpec]:
    table: dict[str, EndpointSpec] = {}
    for group in groups:
        for spec in group:
            if spec.name in table:
                raise ValueError(f"Duplicate endpoint name '{spec.name}'")
            table[spec.name] = spec
    return table


ENDPOINTS: dict[str, EndpointSpec] = _index(
    AUTHORIZATION,
    HOUSEHOLDS,
    GROUPS,
    GROUP_VOLUME,
    PLAYBACK,
    PLAYBACK_METADATA,
    PLAYBACK_SESSIONS,
    FAVORITES,
    PLAYLISTS,
    MUSIC_SERVICE_ACCOUNTS,
    AUDIO_CLIP,
    HOME_THEATER,
    PLAYER_SETTINGS,
    PLAYER_VOLUME,
)


def get_endpoint(name: str) -> EndpointSpec:
    try:
        return ENDPOINTS[name]
    except KeyError:
        raise UnknownEndpointError(name) from None


def list_endpoints() -> list[str]:
    return sorted(ENDPOINTS)
