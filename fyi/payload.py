import re
from dataclasses import dataclass, fields
from typing import Dict, Mapping, Optional
from urllib.parse import parse_qsl

from .constants import FORM_MIMETYPE


_INTEGER_RE = re.compile(r"-?[0-9]+")


class FormParseError(Exception):
    pass


class PayloadDecodeError(Exception):
    pass


def _check_escapes(raw: str) -> None:
    # parse_qsl aceita '%' inválido em silêncio; o formulário do chat não
    idx = raw.find("%")
    while idx != -1:
        chunk = raw[idx + 1:idx + 3]
        if len(chunk) < 2 or any(c not in "0123456789abcdefABCDEF" for c in chunk):
            raise FormParseError(f"invalid URL escape {raw[idx:idx + 3]!r}")
        idx = raw.find("%", idx + 3)


def parse_form(body: Optional[bytes], mimetype: str = FORM_MIMETYPE) -> Dict[str, str]:
    """Decodifica um corpo application/x-www-form-urlencoded.

    Corpo ausente ou vazio gera FormParseError("missing form body"). Outros
    content-types são tratados como formulário vazio. Para chaves repetidas
    vale o primeiro valor.
    """
    if not body:
        raise FormParseError("missing form body")
    if mimetype != FORM_MIMETYPE:
        return {}
    try:
        raw = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FormParseError(str(exc)) from exc
    _check_escapes(raw)

    form: Dict[str, str] = {}
    for key, value in parse_qsl(raw, keep_blank_values=True):
        form.setdefault(key, value)
    return form


@dataclass(frozen=True)
class IncomingPayload:
    token: str = ""
    team_id: str = ""
    team_domain: str = ""
    channel_id: str = ""
    channel_name: str = ""
    timestamp: int = 0
    user_id: str = ""
    user_name: str = ""
    post_id: str = ""
    text: str = ""
    trigger_word: str = ""
    file_ids: str = ""

    @classmethod
    def from_form(cls, form: Mapping[str, str]) -> "IncomingPayload":
        # Campos extras do webhook (command, response_url, ...) são ignorados
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in form.items() if k in known}

        raw_ts = values.pop("timestamp", "")
        if raw_ts != "":
            if not _INTEGER_RE.fullmatch(raw_ts):
                raise PayloadDecodeError(f"timestamp: invalid integer value {raw_ts!r}")
            values["timestamp"] = int(raw_ts)
        return cls(**values)
