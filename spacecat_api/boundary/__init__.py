"""
Boundary layer for external system integrations.

Handles all interactions with external systems (entity store, S3, SQS,
IMS, Slack, webhooks). Provides adapters and clients for infrastructure
dependencies.
"""
