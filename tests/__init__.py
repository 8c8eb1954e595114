"""
Test suite for Bank Statement Analyzer.

Architecture: Hexagonal (Ports & Adapters)
Testing Strategy:
- Unit tests: Domain entities and value objects
- Integration tests: Use cases with mocked adapters
- E2E tests: Full API workflow with test database
"""
