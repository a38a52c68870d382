"""Application assembly"""
