"""Domain layer for savetrack application.

Services live in their own modules (savetrack.domain.goal,
savetrack.domain.progress, ...) and are imported from there.
"""
