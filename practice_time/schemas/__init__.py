"""
Wire schemas for calendar records and the timezone API.
"""
