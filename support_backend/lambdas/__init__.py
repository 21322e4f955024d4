"""
Lambda entrypoints.

- websocket_handler: API Gateway WebSocket routes
- contact_event_handler: EventBridge Amazon Connect contact events
- queue_routing_handler: Contact flow queue selection
"""
