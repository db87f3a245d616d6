# Prefixo das variáveis de ambiente (FYI_TAGS, FYI_GRAFANA_HOST, ...)
ENV_PREFIX = "FYI_"

DEFAULT_DEBUG = "true"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = "8888"
DEFAULT_HEALTHZ_TIMEOUT = "3"
DEFAULT_USERNAME = "ForYourInformation"
DEFAULT_ICON_URL = "https://avatars2.githubusercontent.com/u/757902?s=460&v=4"

# Tag fixa injetada em toda anotação para identificar a origem
MARKER_TAG = "fyi"

RESPONSE_TYPE_EPHEMERAL = "ephemeral"
GRAFANA_ANNOTATIONS_PATH = "/api/annotations"

FORM_MIMETYPE = "application/x-www-form-urlencoded"

TRUE_VALUES = {"1", "t", "true", "yes", "on"}
FALSE_VALUES = {"0", "f", "false", "no", "off"}

# Textos devolvidos ao usuário
GET_NOT_ALLOWED_TEXT = "GET method not allowed, use POST"
COMMAND_EXAMPLE = "/command reboot server #outage"
