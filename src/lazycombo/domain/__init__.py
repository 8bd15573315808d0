"""Domain layer - abstractions with no dependency on a UI toolkit.

This layer contains:
- protocols: Interfaces the model needs from its host (Dispatcher, ComboHost)
- types: Lookup and interaction types (LookupContext, CancellationToken, ...)
- events: Domain events and event bus
- observable: Change-notifying property descriptor
- exceptions: Domain-specific exceptions

The domain layer has NO dependencies on the application or presentation layers.
"""
