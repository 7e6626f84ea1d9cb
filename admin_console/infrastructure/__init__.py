"""Infrastructure adapters: Firebase (Firestore, Auth, Functions) and security."""
