"""Quiz services: persistence gateway, live play sessions and quiz management."""
