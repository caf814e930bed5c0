"""Web backend for the certificate and credential designer"""
