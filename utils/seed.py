SAMPLE_ROOMS = [
    {
        "room_id": "room-001",
        "name": "Mountain View Deluxe",
        "description": "Wake up to breathtaking Himalayan views from your private balcony. "
                       "This spacious room features modern amenities while maintaining traditional charm.",
        "price": 2500,
        "capacity": 3,
        "room_size": "30 sqm",
        "bed_type": "King Size Bed",
        "floor": "2nd Floor",
        "amenities": ["Mountain View", "AC", "WiFi", "Private Bathroom", "Balcony", "Mini Fridge", "Tea/Coffee Maker"],
        "images": [
            "https://images.unsplash.com/photo-1586105251261-72a756497a11?w=600&h=400&fit=crop&q=80",
            "https://images.unsplash.com/photo-1566073771259-6a8506099945?w=600&h=400&fit=crop&q=80",
        ],
        "status": "active",
    },
    {
        "room_id": "room-002",
        "name": "Cozy Garden Room",
        "description": "Peaceful garden views with modern amenities and comfortable furnishing. "
                       "Perfect for couples seeking tranquility.",
        "price": 2000,
        "capacity": 2,
        "room_size": "25 sqm",
        "bed_type": "Queen Size Bed",
        "floor": "1st Floor",
        "amenities": ["Garden View", "WiFi", "Private Bathroom", "Work Desk", "AC", "Tea/Coffee Maker"],
        "images": [
            "https://images.unsplash.com/photo-1578662996442-48f60103fc96?w=600&h=400&fit=crop&q=80",
            "https://images.unsplash.com/photo-1595576508898-0ad5c879a061?w=600&h=400&fit=crop&q=80",
        ],
        "status": "active",
    },
    {
        "room_id": "room-003",
        "name": "Family Suite",
        "description": "Spacious suite perfect for families with separate living area and kitchenette. "
                       "Accommodates up to 6 guests comfortably.",
        "price": 3500,
        "capacity": 6,
        "room_size": "50 sqm",
        "bed_type": "2 Queen Beds",
        "floor": "2nd Floor",
        "amenities": ["Mountain View", "Living Area", "Kitchenette", "WiFi", "2 Bathrooms", "AC", "Dining Table", "Sofa Bed"],
        "images": [
            "https://images.unsplash.com/photo-1560472354-b33ff0c44a43?w=600&h=400&fit=crop&q=80",
            "https://images.unsplash.com/photo-1522708323590-d24dbb6b0267?w=600&h=400&fit=crop&q=80",
        ],
        "status": "active",
    },
]

def seed_rooms(store, rooms=None):
    """Add sample rooms that are not in the catalog yet (safe & idempotent)."""
    existing = {r["room_id"] for r in store.list_rooms()}
    added = []
    for room in rooms or SAMPLE_ROOMS:
        if room["room_id"] not in existing:
            store.put_room(dict(room))
            added.append(room["room_id"])
    return added
