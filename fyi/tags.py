from dataclasses import dataclass


@dataclass(frozen=True)
class Field:
    raw: str
    is_tag: bool

    @property
    def tag(self):
        # Remove exatamente o primeiro caractere, mesmo que o '#' esteja no meio
        return self.raw[1:]


def is_tag_field(field):
    return len(field) > 1 and "#" in field


def split_fields(text):
    """Quebra o texto por espaços e classifica cada campo como tag ou mensagem."""
    for raw in text.split():
        yield Field(raw=raw, is_tag=is_tag_field(raw))


def tag_is_allowed(tag, allow_list):
    """Allow-list vazia significa sem restrição."""
    if not allow_list:
        return True
    return tag in allow_list

