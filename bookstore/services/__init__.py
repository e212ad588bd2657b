"""Application services: session, cart, checkout and image orchestration."""
