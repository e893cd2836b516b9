"""Internal constants shared across the package."""

GEOCLUE2_BUS_NAME = "org.freedesktop.GeoClue2"
MANAGER_PATH = "/org/freedesktop/GeoClue2/Manager"

MANAGER_INTERFACE = "org.freedesktop.GeoClue2.Manager"
CLIENT_INTERFACE = "org.freedesktop.GeoClue2.Client"
LOCATION_INTERFACE = "org.freedesktop.GeoClue2.Location"

DESKTOP_ID = "waydroid_geoclue_bridge"
OUTPUT_PATH = "/var/lib/waydroid/rootfs/tmp/location_data.json"

#: Object path GeoClue2 reports in ``Location`` before the first fix.
NO_LOCATION = "/"

#: Marker written for property values that have no scalar string form.
UNKNOWN_VALUE = "UNKNOWN"

# ------------------------------------------------------------------
# D-Bus type signatures of the client properties we write
# ------------------------------------------------------------------

SIGNATURE_STRING = "s"
SIGNATURE_UINT32 = "u"
