"""Service layer — wire-form mask operations returning ServiceResult."""
