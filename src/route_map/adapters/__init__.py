"""
Adapter implementations for the route map.

Adapters are concrete implementations of the port interfaces.
They handle the specifics of dataset files and backing stores.
"""
