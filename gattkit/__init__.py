"""Bluetooth Low Energy GATT server building blocks: UUIDs, service model, attribute tables, ATT request handling and advertising packets."""

__version__ = "0.1.0"