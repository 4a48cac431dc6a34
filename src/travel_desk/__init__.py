"""Travel Desk access core.

The package is organized by feature modules (users, access) with a thin Flask
controller layer on top of service/repository layers.
"""
