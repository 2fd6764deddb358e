"""Constants for the local geographic projection."""

# Mean earth radius in metres (IUGG), the sphere the projection is built on
EARTH_RADIUS = 6371008.8

# Lon/lat on that same sphere, so no datum shift happens between the two
GEOGRAPHIC_PROJ = f"+proj=longlat +R={EARTH_RADIUS} +no_defs"
AEQD_PROJ = "+proj=aeqd +lat_0={lat_0} +lon_0={lon_0} +R=%s +units=m +no_defs" % EARTH_RADIUS
