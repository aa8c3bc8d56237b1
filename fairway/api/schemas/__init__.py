# This file marks the schemas package for API request and response models.
# Request bodies accept camelCase field names and are dumped back to camelCase for the services.
