"""
Multimodal support backend.

Session-to-connection routing and chat/voice escalation continuity on
Amazon Connect, API Gateway WebSockets and DynamoDB.
"""
