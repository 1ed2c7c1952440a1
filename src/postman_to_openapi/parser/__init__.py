"""Postman collection decoding."""
