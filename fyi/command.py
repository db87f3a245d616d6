import logging
from typing import Callable, List, Optional

from .config import Config
from .constants import FORM_MIMETYPE, MARKER_TAG
from .formatters import (
    bad_token_message,
    decode_error_message,
    form_error_message,
    missing_message_message,
    missing_tag_message,
    unknown_tag_message,
)
from .payload import FormParseError, IncomingPayload, PayloadDecodeError, parse_form
from .services import AnnotationRequest, GrafanaError, send_grafana_annotation
from .tags import split_fields, tag_is_allowed

logger = logging.getLogger(__name__)

Sender = Callable[[Config, AnnotationRequest], str]


class CommandRejected(Exception):
    """Comando recusado; a mensagem é o texto devolvido ao usuário."""


def check_token(config: Config, payload: IncomingPayload) -> None:
    if config.token and config.token != payload.token:
        raise CommandRejected(bad_token_message(payload.token))


def compose_annotation(payload: IncomingPayload, allow_list) -> AnnotationRequest:
    """Separa mensagem e tags do texto e monta a anotação.

    A validação das tags acontece durante a varredura (a primeira tag fora da
    allow-list encerra o comando); as checagens de tag/mensagem vazias só
    depois da varredura completa.
    """
    tags: List[str] = [MARKER_TAG, payload.user_name]
    message: List[str] = []

    for field in split_fields(payload.text):
        if field.is_tag:
            if not tag_is_allowed(field.tag, allow_list):
                raise CommandRejected(unknown_tag_message(field.raw, allow_list))
            tags.append(field.tag)
        else:
            message.append(field.raw)

    if len(tags) <= 2 and allow_list:
        raise CommandRejected(missing_tag_message(allow_list))
    if not message:
        raise CommandRejected(missing_message_message())

    return AnnotationRequest(text=" ".join(message), tags=tags)


def process_command(
    body: Optional[bytes],
    config: Config,
    mimetype: str = FORM_MIMETYPE,
    sender: Optional[Sender] = None,
) -> str:
    """Executa o pipeline completo e devolve sempre o texto da resposta."""
    send = sender or send_grafana_annotation

    try:
        form = parse_form(body, mimetype)
    except FormParseError as exc:
        msg = form_error_message(exc)
        logger.warning(msg)
        return msg

    try:
        payload = IncomingPayload.from_form(form)
    except PayloadDecodeError as exc:
        msg = decode_error_message(exc)
        logger.warning(msg)
        return msg

    try:
        check_token(config, payload)
        annotation = compose_annotation(payload, config.tags)
    except CommandRejected as exc:
        msg = str(exc)
        logger.info("Command from %r rejected: %s", payload.user_name, msg)
        return msg

    try:
        result = send(config, annotation)
    except GrafanaError as exc:
        logger.error(str(exc))
        return str(exc)

    logger.info("Annotation created for %r with tags %s: %s", payload.user_name, annotation.tags, result)
    return result
