"""Food marketplace domain: catalog, search, offers, cart, orders and agents."""
