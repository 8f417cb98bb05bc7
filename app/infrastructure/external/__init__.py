"""Vendor HTTP clients: email, storage and LED player CMS."""
