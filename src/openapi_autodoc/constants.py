"""HTTP and content-type constants shared by the schema builders."""

OPENAPI_VERSION = "3.0.0"

GET = "GET"
POST = "POST"
PUT = "PUT"
PATCH = "PATCH"

# Methods that always get a requestBody entry, even without body params
BODY_METHODS = (POST, PUT, PATCH)

WEBSOCKET = "WEBSOCKET"
STREAM = "STREAM"

# Special handlers are served over a plain GET
METHOD_ALIASES = {
    WEBSOCKET: GET,
    STREAM: GET,
}

JSON_CONTENT = "application/json"
TEXT_CONTENT = "text/plain"
FORM_CONTENT = "application/x-www-form-urlencoded"
XML_CONTENT = "application/xml"
MULTIPART_CONTENT = "multipart/form-data"

COMPONENT_PREFIX = "#/components/schemas/"
