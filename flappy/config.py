# config.py
import os
import json
import logging
import platform
from dataclasses import dataclass, asdict

log = logging.getLogger("flappy.config")

# =====================
# ŚWIAT
# =====================
WIDTH = 800
HEIGHT = 500
GROUND_HEIGHT = 50

TICKS_PER_SECOND = 60

# anti-spiral: maksymalny dt brany pod uwagę w jednej klatce
MAX_DT_MS_PER_FRAME = 100

# =====================
# PTAK - PARAMETRY
# =====================
BIRD_X = 150.0
BIRD_START_Y = HEIGHT / 2
BIRD_RADIUS = 12.0

# mniejsza grawitacja = łatwiejsze sterowanie
GRAVITY = 0.4
JUMP_IMPULSE = -8.0

# =====================
# RURY - PARAMETRY
# =====================
PIPE_WIDTH = 60.0
PIPE_SPEED_PX_PER_TICK = 1.5
MIN_PIPE_HEIGHT = 30.0
PIPE_GAP = 200.0
SPAWN_INTERVAL_TICKS = 240

# pierwsze bramki szersze (poniżej progu punktów)
EASY_SCORE_THRESHOLD = 3
EASY_GAP_BONUS = 50.0

# =====================
# KOLIZJE - marginesy
# =====================
BOUNDS_MARGIN_PX = 5.0
PIPE_MARGIN_PX = 3.0


@dataclass(frozen=True)
class GameConfig:
    width: float = WIDTH
    height: float = HEIGHT
    ground_height: float = GROUND_HEIGHT
    ticks_per_second: int = TICKS_PER_SECOND
    max_dt_ms: int = MAX_DT_MS_PER_FRAME

    bird_x: float = BIRD_X
    bird_start_y: float = BIRD_START_Y
    bird_radius: float = BIRD_RADIUS
    gravity: float = GRAVITY
    jump_impulse: float = JUMP_IMPULSE

    pipe_width: float = PIPE_WIDTH
    pipe_speed: float = PIPE_SPEED_PX_PER_TICK
    min_pipe_height: float = MIN_PIPE_HEIGHT
    pipe_gap: float = PIPE_GAP
    spawn_interval: int = SPAWN_INTERVAL_TICKS
    easy_score_threshold: int = EASY_SCORE_THRESHOLD
    easy_gap_bonus: float = EASY_GAP_BONUS

    bounds_margin: float = BOUNDS_MARGIN_PX
    pipe_margin: float = PIPE_MARGIN_PX


DEFAULT_CONFIG = GameConfig()


# =====================
# USTAWIENIA - zapis/odczyt (USER)
# =====================
SETTINGS_FOLDER_NAME = "Flappy Bird"
SETTINGS_FILENAME = "settings.json"

JUMP_KEYS = ("space", "up", "w")
DEFAULT_API_URL = "http://localhost:3001/api"


@dataclass
class UserSettings:
    username: str = "player"
    jump_key: str = "space"
    api_url: str = DEFAULT_API_URL


def _get_settings_path(base=None):
    # "lokalizacja użytkownika": na Windows APPDATA, gdzie indziej katalog domowy
    if not base and platform.system() == "Windows":
        base = os.environ.get("APPDATA") or os.environ.get("LOCALAPPDATA")

    if not base:
        base = os.path.expanduser("~")

    folder = os.path.join(base, SETTINGS_FOLDER_NAME)
    path = os.path.join(folder, SETTINGS_FILENAME)
    return folder, path


def load_user_settings(base=None) -> UserSettings:
    settings = UserSettings(api_url=os.environ.get("SCORE_API_URL", DEFAULT_API_URL))
    _folder, path = _get_settings_path(base)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        # pierwszy start: utwórz plik z domyślnymi ustawieniami
        save_user_settings(settings, base)
        return settings
    except (OSError, ValueError) as e:
        # uszkodzony plik / brak uprawnień: zostaw domyślne
        log.warning("Could not read settings from %s: %s", path, e)
        return settings

    if isinstance(data, dict):
        if "username" in data:
            name = str(data["username"]).strip()
            if name:
                settings.username = name[:20]

        if "jump_key" in data:
            v = str(data["jump_key"]).lower().strip()
            if v in JUMP_KEYS:
                settings.jump_key = v

        if "api_url" in data and "SCORE_API_URL" not in os.environ:
            settings.api_url = str(data["api_url"]).rstrip("/")

    return settings


def save_user_settings(settings: UserSettings, base=None) -> bool:
    folder, path = _get_settings_path(base)
    try:
        os.makedirs(folder, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(asdict(settings), f, ensure_ascii=False, indent=2)
    except OSError as e:
        log.warning("Could not save settings to %s: %s", path, e)
        return False
    return True
