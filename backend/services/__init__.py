"""Services: business logic between the routers and the repositories.

Services take an AsyncSession explicitly, return plain dicts shaped for the
frontend, and raise ``services.errors`` exceptions for expected failures.
"""
