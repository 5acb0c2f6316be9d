"""
Dog Friendly Map Assistant backend.

Serves dog-friendly places and events around a map center, filters them,
answers questions through a map-grounded AI assistant and relays push
notifications.
"""
