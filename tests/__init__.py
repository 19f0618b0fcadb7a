"""
Club Training API Test Suite

Tests are organized into:
- unit/: assembly layer, pagination, authentication and services with mocked MongoDB / Graph API
- integration/: API endpoints through the ASGI app with service dependencies overridden
- fixtures/: Faker-based entities, stored documents and motor mocks
"""
