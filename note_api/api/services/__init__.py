# This file marks the services package for account and note business logic.
# It exists so routers can depend on cohesive service classes instead of raw SQL.
# Service modules own input validation and store calls; routers only shape responses.
