"""Adapters — platform clients and the HTTP surface."""
