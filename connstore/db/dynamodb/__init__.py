"""Shared DynamoDB utilities.

This package centralizes:
- typed, expressive errors for every store call
- marshalling between AttributeValue and plain Python records
- sealed scan cursor tokens
- the paginated scanner and the full-table aggregator

"""
