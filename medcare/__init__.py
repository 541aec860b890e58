"""MedCare ledger: rooms, appointments and billing for one facility."""
