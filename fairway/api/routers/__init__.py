# This file marks the routers package for API route modules.
# Each module registers one golf domain area under the versioned API path.
