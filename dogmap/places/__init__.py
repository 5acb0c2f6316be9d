"""
Places and events around a map center.

Responsibilities:
- Load the seed catalog of dog-friendly places and events.
- Scatter them around the requested center with uniform disk sampling.
- Filter places by text, category, open-now and required amenities.
- Look up the events hosted at a place.
"""
