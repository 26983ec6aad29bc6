"""Storefront client: cart, client-side routing and checkout."""
