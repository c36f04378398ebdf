"""
ESO Logs data access layer.

Design rules:
- Views call ONLY `data.service` (DataFetchOrchestrator / FetchResult).
- Every live call is wrapped so failures degrade to the baseline dataset.
- No env var reads here (config-only).
"""
