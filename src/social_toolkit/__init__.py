"""
Social toolkit: a REST and Socket.IO backend for a small social network.

'SocialToolkit' (in 'social_toolkit.toolkit') wires the repositories, the
credential provider and the realtime components; 'social_toolkit.main' serves
them with FastAPI and python-socketio.
"""
