"""Shared constants for the CDN edge IP finder."""

from datetime import timezone, timedelta

# Timezone
UTC_PLUS_8 = timezone(timedelta(hours=8))

# Text sources that publish lists of Cloudflare edge IPs
DEFAULT_IP_SOURCES = [
    "https://ip.164746.xyz",
    "https://ip.haogege.xyz",
    "https://stock.hostmonit.com/CloudFlareYes",
    "https://api.uouin.com/cloudflare.html",
    "https://addressesapi.090227.xyz",
    "https://www.wetest.vip",
]

# Probe target on each candidate edge
PROBE_PATH = "/cdn-cgi/trace"
PROBE_SCHEME = "https"

# Many edges refuse requests without a browser user agent
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

# Default values
DEFAULT_SOURCE_TIMEOUT = 10.0  # seconds per source fetch
DEFAULT_PROBE_TIMEOUT = 5.0  # seconds per probe
DEFAULT_CONCURRENCY = 10  # probes in flight per group
DEFAULT_BATCH_INTERVAL = 1.0  # seconds between groups
DEFAULT_TOP_N = 25
DEFAULT_REPORT_DIR = "reports"

# Extra time the HTTP client's own timeout gets on top of the probe deadline
CLIENT_TIMEOUT_SLACK = 1.0

# CloudWatch
DEFAULT_CLOUDWATCH_NAMESPACE = "CFIPLatency"
CLOUDWATCH_MAX_BATCH = 1000
