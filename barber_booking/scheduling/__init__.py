"""
Scheduling core:
- Slot generation from weekly availability (slot_generator.py)
- Overlap detection against confirmed bookings (conflicts.py)
- Per-provider serialization point (locks.py)
- Transactional booking (booking.py)
- Public scheduling surface (service.py)
"""
