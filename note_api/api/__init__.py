# This file marks the API package for the HTTP application and its collaborators.
# It exists so routers, services, schemas, and store access share one import namespace.
