"""Constants for cfpublish."""

DEFAULT_ENDPOINT = "https://minecraft.curseforge.com"
DEFAULT_TOKEN_ENV = "CURSEFORGE_TOKEN"
DEFAULT_CONFIG_FILE = "publish.toml"
DEFAULT_PROPERTIES_FILE = "gradle.properties"

# API paths
VERSION_TYPES_PATH = "/api/game/version-types"
VERSIONS_PATH = "/api/game/versions"
UPLOAD_PATH = "/api/projects/{project_id}/upload-file"

TOKEN_HEADER = "X-Api-Token"

# HTTP timeout (seconds)
HTTP_TIMEOUT = 60
