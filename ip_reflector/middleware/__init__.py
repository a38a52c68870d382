"""Exception handling for HTTP requests"""
