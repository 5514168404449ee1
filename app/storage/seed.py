"""
Demo catalog loaded into an empty store on startup.
"""

from typing import Any, Dict, List
import logging

from app.models.location import dump_hotspots
from app.storage.base import Storage

logger = logging.getLogger(__name__)


LOCATIONS: List[Dict[str, Any]] = [
    {
        "slug": "midtown",
        "name": "Midtown, Atlanta",
        "description": "Walk to parks, restaurants, and cultural attractions from our carefully preserved historic properties.",
        "image_url": "https://i.imgur.com/THKfFjB.png",
        "link_text": "View Midtown Properties",
    },
    {
        "slug": "virginia-highland",
        "name": "Virginia-Highland, Atlanta",
        "description": "Experience the charm of Atlanta's most walkable neighborhood in our character-rich homes.",
        "image_url": "https://i.imgur.com/xHkf2HL.jpg",
        "link_text": "View Va-Hi Properties",
    },
    {
        "slug": "dallas",
        "name": "Dallas, Texas",
        "description": "Explore our growing collection of distinctive properties in Dallas's most desirable areas.",
        "image_url": "https://i.imgur.com/dMU0oEE.jpg",
        "link_text": "View Dallas Properties",
    },
]

FEATURES: List[Dict[str, Any]] = [
    {
        "title": "Historic Character",
        "description": "Preserved architectural details, high ceilings, and unique features that tell a story.",
        "icon": "fa-landmark",
    },
    {
        "title": "Responsive Management",
        "description": "We are a small family-owned business, providing attentive management and quick responses.",
        "icon": "fa-headset",
    },
    {
        "title": "Modern Amenities",
        "description": "Updated interiors with modern conveniences and online resident services including rent payment, applications, and leases.",
        "icon": "fa-wifi",
    },
    {
        "title": "Prime Locations",
        "description": "Walkable neighborhoods close to dining, shopping, and entertainment.",
        "icon": "fa-map-marker-alt",
    },
]

# Properties reference their location by slug
PROPERTIES: List[Dict[str, Any]] = [
    {
        "location": "midtown",
        "name": "253 14th St NE",
        "description": "Charming apartments near Piedmont Park on quiet 14th Street, steps from Atlanta's largest greenspace and the Midtown Mile.",
        "address": "253 14th St NE, Atlanta, GA 30309",
        "bedrooms": 2,
        "bathrooms": 1.0,
        "sqft": 1000,
        "rent": None,
        "image_url": "https://i.imgur.com/O9Fu46o.png",
        "features": "Hardwood floors, updated appliances, large windows, central AC",
        "property_type": "apartment",
        "is_multifamily": True,
        "unit_count": 4,
    },
    {
        "location": "midtown",
        "name": "965 Myrtle St NE",
        "description": "Historic apartment on a tree-lined Midtown street with period details throughout.",
        "address": "965 Myrtle St NE, Atlanta, GA 30309",
        "bedrooms": 1,
        "bathrooms": 1.0,
        "sqft": 850,
        "rent": None,
        "image_url": "https://i.imgur.com/9L78Ghe.png",
        "features": "Historic details, updated kitchen, period moldings, high ceilings",
        "property_type": "apartment",
        "is_multifamily": False,
        "unit_count": 0,
    },
    {
        "location": "midtown",
        "name": "721 Argonne Ave NE",
        "description": "Cozy apartments on Argonne Avenue within walking distance of Piedmont Park and Ponce City Market.",
        "address": "721 Argonne Ave NE, Atlanta, GA 30308",
        "bedrooms": 2,
        "bathrooms": 2.0,
        "sqft": 1100,
        "rent": None,
        "image_url": "https://i.imgur.com/eFdi7sd.jpg",
        "features": "Updated kitchen, modern appliances, spacious closets, pet-friendly",
        "property_type": "apartment",
        "is_multifamily": False,
        "unit_count": 0,
    },
    {
        "location": "virginia-highland",
        "name": "1031 Lanier Blvd NE",
        "description": "Classic Virginia-Highland home blocks from the shops and restaurants of Highland Avenue.",
        "address": "1031 Lanier Blvd NE, Atlanta, GA 30306",
        "bedrooms": 2,
        "bathrooms": 1.0,
        "sqft": 1050,
        "rent": None,
        "image_url": "https://i.imgur.com/OWMqzbK.png",
        "features": "Classic architectural details, modern kitchen, hardwood floors, large windows",
        "property_type": "house",
        "is_multifamily": False,
        "unit_count": 0,
    },
    {
        "location": "virginia-highland",
        "name": "823 Greenwood Ave NE",
        "description": "Newly renovated apartment with a private patio near the Atlanta BeltLine.",
        "address": "823 Greenwood Ave NE, Atlanta, GA 30306",
        "bedrooms": 2,
        "bathrooms": 2.0,
        "sqft": 1150,
        "rent": None,
        "image_url": "https://i.imgur.com/GQPUMr8.png",
        "features": "Newly renovated, spacious layout, private patio, pet-friendly",
        "property_type": "apartment",
        "is_multifamily": False,
        "unit_count": 0,
    },
    {
        "location": "dallas",
        "name": "4806 Live Oak St",
        "description": "Modern living in the historic Bryan Place neighborhood, walking distance to Deep Ellum.",
        "address": "4806 Live Oak St, Dallas, TX 75214",
        "bedrooms": 2,
        "bathrooms": 2.0,
        "sqft": 1100,
        "rent": None,
        "image_url": "https://i.imgur.com/psQEwWF.jpg",
        "features": "Modern finishes, open concept, stainless appliances, hardwood floors",
        "property_type": "house",
        "is_multifamily": False,
        "unit_count": 0,
    },
    {
        "location": "dallas",
        "name": "6212 Martel Ave",
        "description": "Tudor-style home in the M Streets, minutes from SMU and Greenville Avenue.",
        "address": "6212 Martel Ave, Dallas, TX 75214",
        "bedrooms": 3,
        "bathrooms": 2.0,
        "sqft": 1450,
        "rent": None,
        "image_url": "https://i.imgur.com/gsremPD.jpg",
        "features": "Tudor-style architecture, updated interior, backyard, garage parking",
        "property_type": "house",
        "is_multifamily": False,
        "unit_count": 0,
    },
]

NEIGHBORHOODS: List[Dict[str, Any]] = [
    {
        "location": "midtown",
        "map_image_url": "https://i.imgur.com/rXMUihK.png",
        "highlights": "Midtown Atlanta is a vibrant urban district known for its mix of business headquarters, cultural attractions, and residential communities.",
        "attractions": "Piedmont Park, High Museum of Art, Atlanta Botanical Garden, Fox Theatre, Colony Square",
        "transportation_info": "Served by MARTA's North-South rail line with stations at North Avenue, Midtown, and Arts Center, and bisected by the BeltLine's Eastside Trail.",
        "dining_options": "South City Kitchen, Empire State South, The Varsity, Mary Mac's Tea Room, and many more.",
        "schools_info": "Springdale Park Elementary, Morningside Elementary and Midtown High School; Georgia Tech and SCAD Atlanta nearby.",
        "parks_and_recreation": "Piedmont Park (189 acres) with sports facilities, trails, and Lake Clara Meer.",
        "historical_info": "Originally a district of early 1900s mansions, Midtown was revitalized in the 1980s while preserving many historic buildings.",
        "explore_description": "Midtown is the heart of the city's arts and culture scene, with walkable streets and world-class cultural venues.",
        "explore_map_url": "https://www.google.com/maps/d/u/0/embed?mid=1XLv06Buip8bENLqmPSeiPE9ehpdzfQY&ehbc=2E312F&noprof=1",
        "hotspots": [
            {
                "name": "High Museum of Art",
                "description": "Southeast's premier art museum featuring classic and contemporary exhibitions.",
                "distance": "0.4 miles from center",
                "imageUrl": "https://i.imgur.com/sdHC6Hr.jpg",
                "link": "https://high.org",
            },
            {
                "name": "Piedmont Park",
                "description": "Atlanta's central park offering green spaces, recreational facilities, and city views.",
                "distance": "0.2 miles from center",
                "imageUrl": "https://i.imgur.com/bAy8idc.jpg",
                "link": "https://piedmontpark.org",
            },
            {
                "name": "Atlanta Botanical Garden",
                "description": "Urban oasis featuring stunning plant collections and seasonal exhibitions.",
                "distance": "0.5 miles from center",
                "imageUrl": "https://i.imgur.com/xq6r9MA.jpg",
                "link": "https://atlantabg.org",
            },
        ],
    },
    {
        "location": "virginia-highland",
        "map_image_url": None,
        "highlights": "Virginia-Highland is a historic, walkable neighborhood of bungalows, boutiques and neighborhood restaurants.",
        "attractions": "Highland Avenue shops, John Howell Park, Atlanta BeltLine Eastside Trail",
        "transportation_info": "Bus routes along North Highland Avenue and quick access to the BeltLine.",
        "dining_options": "Murphy's, La Tavola, Highland Tap and a range of cafes.",
        "schools_info": "Springdale Park Elementary and Inman Middle School.",
        "parks_and_recreation": "John Howell Park and the nearby Piedmont Park.",
        "historical_info": "Developed in the 1910s and 1920s as one of Atlanta's first streetcar suburbs.",
        "explore_description": "Tree-lined streets, independent shops and a lively dining scene.",
        "explore_map_url": None,
        "hotspots": [
            {
                "name": "Ponce City Market",
                "description": "Historic marketplace with dining, shopping, and entertainment.",
                "distance": "1.2 miles from neighborhood center",
                "imageUrl": "https://i.imgur.com/1zBCVnO.jpg",
                "link": "http://poncecitymarket.com",
            },
            {
                "name": "Virginia Highland Shopping District",
                "description": "Boutique shopping and local businesses in a charming setting.",
                "distance": "In the heart of the neighborhood",
                "imageUrl": "https://i.imgur.com/mmnSr5n.jpg",
                "link": "https://www.virginiahighlanddistrict.com",
            },
        ],
    },
    {
        "location": "dallas",
        "map_image_url": None,
        "highlights": "East Dallas offers historic homes close to Deep Ellum, White Rock Lake and Greenville Avenue.",
        "attractions": "White Rock Lake, Dallas Arboretum, Deep Ellum, Dallas Farmers Market",
        "transportation_info": "DART bus and rail service with easy access to I-30 and I-75.",
        "dining_options": "Greenville Avenue restaurants and the Deep Ellum food scene.",
        "schools_info": "Dallas ISD schools; SMU and Baylor Medical Center nearby.",
        "parks_and_recreation": "White Rock Lake Park with trails, boating and the Dallas Arboretum.",
        "historical_info": "The M Streets and Lakewood areas are known for their 1920s Tudor-style homes.",
        "explore_description": "Historic streets near the city's best lakes, music venues and markets.",
        "explore_map_url": None,
        "hotspots": [
            {
                "name": "White Rock Lake",
                "description": "Urban oasis featuring a 9.3-mile trail, water activities, and stunning skyline views.",
                "distance": "1.2 miles from center",
                "imageUrl": "https://i.imgur.com/GkYyI2f.jpg",
                "link": "https://www.dallasparks.org/235/White-Rock-Lake-Park",
            },
            {
                "name": "Deep Ellum",
                "description": "Historic entertainment district known for live music, street art, and eclectic dining.",
                "distance": "3.5 miles from center",
                "imageUrl": "https://i.imgur.com/vSWSMob.jpg",
                "link": "https://deepellumtexas.com",
            },
        ],
    },
]

UNITS: List[Dict[str, Any]] = [
    {"property": "253 14th St NE", "unit_number": "101", "bedrooms": 2, "bathrooms": 1.0, "sqft": 950,
     "rent": 1650, "available": True, "description": "Ground floor unit with garden view.",
     "features": "Hardwood floors, updated kitchen"},
    {"property": "253 14th St NE", "unit_number": "102", "bedrooms": 1, "bathrooms": 1.0, "sqft": 750,
     "rent": 1350, "available": False, "description": "Quiet one-bedroom facing 14th Street.",
     "features": "Large windows, walk-in closet"},
    {"property": "253 14th St NE", "unit_number": "201", "bedrooms": 2, "bathrooms": 1.5, "sqft": 1000,
     "rent": 1800, "available": True, "description": "Top floor unit with high ceilings.",
     "features": "Skylight, renovated bathroom, central AC"},
]

PROPERTY_IMAGES: List[Dict[str, Any]] = [
    {"property": "253 14th St NE", "url": "https://i.imgur.com/O9Fu46o.png",
     "alt": "253 14th St NE exterior", "display_order": 0, "is_featured": True},
    {"property": "253 14th St NE", "url": "https://i.imgur.com/Qt30zdg.png",
     "alt": "253 14th St NE living room", "display_order": 1, "is_featured": False},
    {"property": "6212 Martel Ave", "url": "https://i.imgur.com/gsremPD.jpg",
     "alt": "6212 Martel Ave front", "display_order": 0, "is_featured": True},
]

INQUIRIES: List[Dict[str, Any]] = [
    {"name": "Sarah Davis", "email": "sarah.davis@example.com", "phone": "404-555-8765",
     "message": "I'm relocating to Atlanta next month and interested in Virginia-Highland. "
                "Can you tell me more about the available properties there?",
     "property": None, "status": "resolved"},
    {"name": "David Wilson", "email": "david.wilson@example.com", "phone": "214-555-9876",
     "message": "Hi, I'm interested in the Martel Ave property. What utilities are included in the rent?",
     "property": "6212 Martel Ave", "status": "new"},
]


async def seed_storage(storage: Storage) -> bool:
    """
    Load the demo catalog into an empty store.

    Args:
        storage: Storage backend to populate

    Returns:
        True if data was written, False if the store already had locations
    """
    if await storage.get_locations():
        logger.info("Storage already contains data, skipping seed")
        return False

    location_ids: Dict[str, int] = {}
    for data in LOCATIONS:
        location = await storage.create_location(dict(data))
        location_ids[location.slug] = location.id

    for data in FEATURES:
        await storage.create_feature(dict(data))

    property_ids: Dict[str, int] = {}
    for data in PROPERTIES:
        values = {key: value for key, value in data.items() if key != "location"}
        values["location_id"] = location_ids[data["location"]]
        created = await storage.create_property(values)
        property_ids[created.name] = created.id

    for data in NEIGHBORHOODS:
        values = {key: value for key, value in data.items() if key not in ("location", "hotspots")}
        values["location_id"] = location_ids[data["location"]]
        values["explore_hotspots"] = dump_hotspots(data["hotspots"])
        await storage.create_neighborhood(values)

    for data in UNITS:
        values = {key: value for key, value in data.items() if key != "property"}
        values["property_id"] = property_ids[data["property"]]
        await storage.create_property_unit(values)

    for data in PROPERTY_IMAGES:
        values = {key: value for key, value in data.items() if key != "property"}
        values["property_id"] = property_ids[data["property"]]
        await storage.create_property_image(values)

    for data in INQUIRIES:
        values = {key: value for key, value in data.items() if key != "property"}
        if data["property"]:
            values["property_id"] = property_ids[data["property"]]
            values["property_name"] = data["property"]
        await storage.create_inquiry(values)

    logger.info(
        f"Seeded {len(LOCATIONS)} locations, {len(PROPERTIES)} properties "
        f"and {len(NEIGHBORHOODS)} neighborhoods into {storage.backend_name} storage"
    )
    return True
