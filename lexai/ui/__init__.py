"""NiceGUI interface - thin visualization layer over the chat session and clients.

Pages:
    - /: Streaming chat with the legal assistant
    - /dashboard: Login, document listing, upload and delete

Contains no business logic. The chat page only reads the transcript and
forwards submissions through the input gate.
"""
