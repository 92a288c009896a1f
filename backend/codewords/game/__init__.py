"""Game domain: board generation, session model, turn rules and views.

Nothing in this package knows about sockets, HTTP or storage. The gateway
loads a session, hands it to the engine functions, and persists the result.
"""
