"""
Use Cases

Organized into domain folders:
- auth/: Signup, session lookup and password reset flows
"""
