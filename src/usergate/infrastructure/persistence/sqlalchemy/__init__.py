"""SQLAlchemy persistence for users."""
