import re


# Rule Defaults
DEFAULT_LIMIT = 4096

# Reference Discovery
# group 1: <img src="..."> value, group 2: url(...) argument; data: URIs are skipped
REFERENCE_PATTERN = re.compile(
    r"""(?:<img[^>]+?src=["'](?!data:)([^"']+?)["'][^>]*?>)|(?:url\(["']?(?!data:)([^"')]+)["']?\))""",
    re.IGNORECASE,
)

# Locality
REMOTE_PATTERN = re.compile(r"^(https?://).+", re.IGNORECASE)

# Encoding
DATA_URI_TEMPLATE = "data:{mime_type};base64,{payload}"

# Extra MIME types missing from some platform tables
EXTRA_MIME_TYPES = {
    ".svg": "image/svg+xml",
    ".webp": "image/webp",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".otf": "font/otf",
    ".eot": "application/vnd.ms-fontobject",
}

# Network
CHUNK_SIZE = 8192
USER_AGENT = "dataurl-inliner/0.1.0"
