import logging
from dataclasses import dataclass, field
from typing import List

import requests

from .config import Config
from .constants import GRAFANA_ANNOTATIONS_PATH

logger = logging.getLogger(__name__)


class GrafanaError(Exception):
    pass


@dataclass(frozen=True)
class AnnotationRequest:
    text: str
    tags: List[str] = field(default_factory=list)

    def to_json(self) -> dict:
        return {"text": self.text, "tags": list(self.tags)}


def send_grafana_annotation(config: Config, annotation: AnnotationRequest) -> str:
    """POST único em <grafana>/api/annotations; devolve o campo message."""
    url = f"{config.grafana_host}{GRAFANA_ANNOTATIONS_PATH}"
    headers = {"Authorization": f"Bearer {config.grafana_api_key}"}
    logger.debug("Sending annotation to %s: %s", url, annotation.to_json())

    try:
        resp = requests.post(url, json=annotation.to_json(), headers=headers, timeout=config.timeout)
    except requests.RequestException as exc:
        raise GrafanaError(f"Unable to post grafana annotation {exc}") from exc

    if resp.status_code != 200:
        raise GrafanaError(f"Error in grafana server response {resp.status_code} {resp.reason}")

    try:
        data = resp.json()
    except ValueError:
        logger.warning("Grafana answered 200 with a non JSON body: %r", resp.text[:200])
        return ""
    logger.debug("Grafana response: %s", data)
    if not isinstance(data, dict):
        return ""
    return data.get("message") or ""
