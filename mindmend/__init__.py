"""MindMend telehealth backend: bookings, chat and realtime notifications."""
