"""Infrastructure: Firestore, storage, email, CMS, PDF and security adapters."""
