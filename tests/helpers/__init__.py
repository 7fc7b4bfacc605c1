"""
Test helpers.

- fakes: in-memory listener, repositories and event publisher
- RecordingReporter: SystemReporter that keeps emitted messages
"""
