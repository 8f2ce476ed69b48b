"""Internal constants shared across the library."""

NOMINATIM_URL = "https://nominatim.openstreetmap.org"
BIGDATACLOUD_URL = "https://api.bigdatacloud.net/data/reverse-geocode-client"
USER_AGENT = "ridelocate/1.0 (+https://github.com/ridelocate/ridelocate)"

#: Prefix marking an address synthesized from raw coordinates.
COORDINATE_GLYPH = "📍"
#: Interim field value while a map click is being resolved.
RESOLVING_TEXT = "🔍 Getting address..."

FALLBACK_PRECISION = 4

PICKUP_FIELD = "pickupAddress"
DROPOFF_FIELD = "dropoffAddress"

# ------------------------------------------------------------------
# GPS guidance shown when the device refuses to report a position
# ------------------------------------------------------------------

GPS_PERMISSION_DENIED_TEXT = (
    "🚫 Location access denied. Please:\n"
    "• Click the location icon in your browser address bar\n"
    "• Allow location access and refresh the page\n"
    "• Or enter your address manually below"
)
GPS_UNAVAILABLE_TEXT = (
    "📡 Location unavailable. Please check:\n"
    "• Your device's GPS is enabled\n"
    "• You have a good internet connection\n"
    "• Or enter your address manually"
)
GPS_TIMEOUT_TEXT = "⏱️ Location request timed out. Please try again or enter your address manually."


def format_coordinate_fallback(lat: float, lng: float) -> str:
    """Render the degraded address used when no provider answered."""
    return f"{COORDINATE_GLYPH} {lat:.{FALLBACK_PRECISION}f}, {lng:.{FALLBACK_PRECISION}f}"
