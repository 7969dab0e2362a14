"""BandMate collaboration API."""
