"""HTTP routers"""
