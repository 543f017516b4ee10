"""
Use Cases

Organized into domain folders:
- auth/: Registration, login, refresh, logout
- sessions/: Session management and the expiry sweep
"""
