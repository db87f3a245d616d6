from .constants import COMMAND_EXAMPLE, RESPONSE_TYPE_EPHEMERAL


def format_tag_list(tags):
    return "[" + " ".join(tags) + "]"


def unknown_tag_message(field, allow_list):
    return (
        f"Unknown tag **{field}**, these tags are available \n"
        f" - tags: _```{format_tag_list(allow_list)}```_"
    )


def missing_tag_message(allow_list):
    return (
        "No tag specify, **one** of these tags are mandatory \n"
        f" - tags: _```{format_tag_list(allow_list)}```_"
    )


def missing_message_message():
    return f"No message specify \n - example: _```{COMMAND_EXAMPLE}```_"


def bad_token_message(token):
    return f"Bad token received :: {token}"


def form_error_message(err):
    return f"Unable to parse form :: {err}"


def decode_error_message(err):
    return f"Unable to decode struct :: {err}"


def build_command_response(config, text):
    """Resposta no formato esperado pelo slash-command (sempre efêmera)."""
    return {
        "icon_url": config.icon_url,
        "response_type": RESPONSE_TYPE_EPHEMERAL,
        "text": text,
        "username": config.username,
    }
