"""
AI map assistant.

Responsibilities:
- Manage Gemini API configuration and credentials.
- Ask Gemini about dog-friendly places, grounded with the Google Maps tool.
- Return the answer with its map citations, or an apology on any failure.
"""
