"""
Boundary layer for external system integrations.

Handles all interactions with external systems (Amazon Connect, DynamoDB,
API Gateway). Provides adapters and clients for infrastructure dependencies.
"""
