# reporter.py
import logging
import threading
from typing import Callable, List, Optional, Tuple

import requests

from flappy.config import DEFAULT_API_URL

log = logging.getLogger("flappy.reporter")

REQUEST_TIMEOUT_S = 2


class ScoreReporter:
    """Wysyła wynik na serwer: fire-and-forget, bez ponawiania.

    Błąd sieci lub odpowiedź != 2xx jest tylko logowana; stan gry nigdy
    od niej nie zależy. Każde zapytanie idzie osobno przez ``requests.post``
    / ``requests.get``, bez współdzielonej sesji między wątkami.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout_s: float = REQUEST_TIMEOUT_S,
        on_submitted: Optional[Callable[[], None]] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.timeout_s = float(timeout_s)
        self.on_submitted = on_submitted

    # ---------- public ----------
    def submit(self, username: str, score: int) -> threading.Thread:
        t = threading.Thread(
            target=self._post_score,
            args=(username, int(score)),
            name="score-reporter",
            daemon=True,
        )
        t.start()
        return t

    def fetch_top_scores(self, limit: int = 10) -> List[Tuple[str, int]]:
        url = f"{self.api_url}/scores/top/{int(limit)}"
        try:
            r = requests.get(url, timeout=self.timeout_s)
            r.raise_for_status()
            data = r.json()
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
            return [
                (str(row.get("username", "")), int(row.get("score", 0)))
                for row in data
                if isinstance(row, dict)
            ]
        except (requests.RequestException, TypeError, ValueError) as e:
            log.warning("Failed to fetch scores: %s", e)
            return []

    # ---------- internal ----------
    def _post_score(self, username: str, score: int) -> bool:
        url = f"{self.api_url}/scores"
        try:
            r = requests.post(url, json={"username": username, "score": score}, timeout=self.timeout_s)
            r.raise_for_status()
        except requests.RequestException as e:
            # nie psujemy gry jeśli zapis się nie uda
            log.warning("Failed to submit score %d for %r: %s", score, username, e)
            return False

        log.info("Submitted score %d for %r", score, username)
        if self.on_submitted is not None:
            try:
                self.on_submitted()
            except Exception:
                log.exception("on_submitted callback failed")
        return True
