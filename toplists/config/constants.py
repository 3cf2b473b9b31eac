"""Constants for the configuration module."""

# Log component names
COMPONENT_CONFIG = "config"
COMPONENT_CLI = "cli"

# File type identifiers
FILE_TYPE_SOURCES = "sources"

# Output file written when the config does not name one
DEFAULT_OUTPUT_FILE = "merged_lists.json"

# Field holding the domain when a source does not declare one
DEFAULT_DOMAIN_FIELD = "domain"

# Taiwan top-site lists as produced by the fetchers. Tranco is primary
# because it is the only list that carries a canonical URL per domain.
DEFAULT_SOURCES: list[dict[str, str | bool]] = [
    {
        "name": "ahrefs",
        "path": "ahrefs_top_tw.json",
        "domain_field": "website",
    },
    {
        "name": "cloudflare",
        "path": "cloudflare_radar_tw.json",
        "domain_field": "domain",
    },
    {
        "name": "similarweb",
        "path": "similarweb_top_taiwan.json",
        "domain_field": "website",
    },
    {
        "name": "semrush",
        "path": "semrush_top_tw.json",
        "domain_field": "domain_name",
    },
    {
        "name": "tranco",
        "path": "tranco_list_tw.json",
        "domain_field": "domain",
        "url_field": "url",
        "primary": True,
    },
]
