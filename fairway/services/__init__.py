# This file marks the feature services package.
# Each module composes the generic resource service with the query shaping of one golf domain area.
