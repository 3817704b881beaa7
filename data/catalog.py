"""
Seed catalogue: restaurants and their menu items.

Loaded into the ``restaurants`` and ``menu_items`` collections by
``services.catalog_service.CatalogService.seed`` (on startup when the
collections are empty) and by ``scripts/seed_catalog.py``.

Menu item ids are slugs, unique across the whole catalogue. ``category_key``
is the slug used by ``GET /menu?category=``.
"""

RESTAURANTS = [
    {
        "_id": "1",
        "name": "Panache",
        "cuisine": "Indian",
        "description": "Authentic Indian cuisine with traditional flavors",
        "rating": 4.5,
        "delivery_time": "30-45 mins",
        "delivery_fee": 40,
        "image": "/images/restaurants/cafe.jpg",
        "location": "Downtown",
        "is_open": True,
    },
    {
        "_id": "2",
        "name": "Cafe After Hours",
        "cuisine": "Italian",
        "description": "Bar bites, artisan pizzas and desserts till late",
        "rating": 4.2,
        "delivery_time": "25-35 mins",
        "delivery_fee": 35,
        "image": "/images/restaurants/panache.jpg",
        "location": "City Center",
        "is_open": True,
    },
    {
        "_id": "3",
        "name": "Symposium Restaurant",
        "cuisine": "Multi-Cuisine",
        "description": "Multi-cuisine restaurant with traditional and modern dishes",
        "rating": 4.7,
        "delivery_time": "30-40 mins",
        "delivery_fee": 50,
        "image": "/images/restaurants/symposium.jpg",
        "location": "Andheri, Mumbai",
        "is_open": True,
    },
]


def _item(item_id, restaurant_id, name, description, price, category,
          category_key, image, rating, prep_time, is_veg=True):
    return {
        "_id": item_id,
        "restaurant_id": restaurant_id,
        "name": name,
        "description": description,
        "price": price,
        "category": category,
        "category_key": category_key,
        "image": image,
        "rating": rating,
        "prep_time": prep_time,
        "is_veg": is_veg,
    }


MENU_ITEMS = [
    # Panache
    _item("chicken-biryani", "1", "Chicken Biryani",
          "Aromatic basmati rice with tender chicken", 250, "Main Course",
          "main-course", "/images/categories/chicken.jpg", 4.6, "35 mins", False),
    _item("panache-dal-makhani", "1", "Dal Makhani",
          "Rich and creamy black lentils", 180, "Main Course", "main-course",
          "/images/categories/North-indian.jpg", 4.4, "25 mins"),
    _item("panache-shahi-paneer", "1", "Shahi Paneer",
          "Cottage cheese in rich gravy", 200, "Main Course", "main-course",
          "/images/categories/North-indian.jpg", 4.3, "20 mins"),
    # Cafe After Hours
    _item("nuts-n-bolts", "2", "NUTS N BOLTS", "Assorted nuts and bolts mix",
          295, "Bar Tidbits", "bar-tidbits", "/images/categories/pizza-2.jpeg",
          4.3, "10 mins"),
    _item("french-fries", "2", "FRENCH FRIES", "Plain/Peri Peri/Cheesy - 299/345",
          299, "Bar Tidbits", "bar-tidbits", "/images/categories/pizza-2.jpeg",
          4.4, "15 mins"),
    _item("garlic-bread", "2", "GARLIC BREAD", "Plain/Cheese - 299/345", 299,
          "Bar Tidbits", "bar-tidbits", "/images/categories/pizza-2.jpeg", 4.5,
          "12 mins"),
    _item("chicken-65", "2", "CHICKEN 65", "Spicy deep-fried chicken", 345,
          "Bar Tidbits", "bar-tidbits", "/images/categories/chicken.jpg", 4.5,
          "18 mins", False),
    _item("beer-batter-fish-fingers", "2", "BEER BATTER FISH FINGERS",
          "Crispy beer battered fish", 495, "Bar Tidbits", "bar-tidbits",
          "/images/categories/pizza-2.jpeg", 4.4, "20 mins", False),
    _item("tomato-basil-soup", "2", "TOMATO BASIL SOUP", "Classic tomato basil soup",
          245, "Soups", "soups", "/images/categories/soup.jpg", 4.3, "12 mins"),
    _item("manchow-soup", "2", "MANCHOW SOUP", "Spicy Indo-Chinese soup", 245,
          "Soups", "soups", "/images/categories/soup.jpg", 4.2, "12 mins"),
    _item("fattoush", "2", "FATTOUSH", "Levantine bread salad", 395,
          "Gourmet Healthy Salads", "salads", "/images/categories/salad.jpg",
          4.4, "10 mins"),
    _item("classic-caesar", "2", "CLASSIC CAESAR", "Romaine, parmesan, croutons",
          395, "Gourmet Healthy Salads", "salads", "/images/categories/salad.jpg",
          4.5, "10 mins"),
    _item("margherita-pizza", "2", "Margherita Pizza",
          "Classic pizza with tomato, mozzarella, and basil", 320,
          "Artisan Pizzas", "artisan-pizzas", "/images/categories/pizza-2.jpeg",
          4.5, "25 mins"),
    _item("quattro-formaggio", "2", "QUATTRO FORMAGGIO", "Four cheese pizza", 645,
          "Artisan Pizzas", "artisan-pizzas", "/images/categories/pizza-2.jpeg",
          4.7, "32 mins"),
    _item("classic-pepperoni", "2", "CLASSIC PEPPERONI", "Classic pepperoni pizza",
          695, "Artisan Pizzas", "artisan-pizzas",
          "/images/categories/pizza-2.jpeg", 4.6, "25 mins", False),
    _item("pasta-alfredo", "2", "Pasta Alfredo", "Creamy white sauce pasta", 280,
          "Flavorsome Pasta", "pasta", "/images/categories/pasta.jpg", 4.4,
          "20 mins"),
    _item("veg-lasagna", "2", "VEG LASAGNA", "Vegetable lasagna", 495,
          "Flavorsome Pasta", "pasta", "/images/categories/pasta.jpg", 4.6,
          "35 mins"),
    _item("spaghetti-meatballs", "2", "SPAGHETTI WITH MEATBALLS",
          "Spaghetti with meatballs", 695, "Flavorsome Pasta", "pasta",
          "/images/categories/pasta.jpg", 4.7, "25 mins", False),
    _item("blueberry-cheesecake", "2", "BLUEBERRY CHEESECAKE",
          "Blueberry cheesecake", 395, "Desserts", "desserts",
          "/images/categories/desserts.jpg", 4.7, "8 mins"),
    _item("tiramisu-jar", "2", "TIRAMISU JAR", "Tiramisu in jar", 495, "Desserts",
          "desserts", "/images/categories/desserts.jpg", 4.8, "10 mins"),
    # Symposium Restaurant
    _item("dal-makhani", "3", "Dal Makhani",
          "Rich and creamy black lentils cooked with butter and spices", 180,
          "North Indian", "north-indian", "/images/categories/North-indian.jpg",
          4.5, "25 mins"),
    _item("shahi-paneer", "3", "Shahi Paneer",
          "Royal cottage cheese curry in rich tomato gravy", 200, "North Indian",
          "north-indian", "/images/categories/North-indian.jpg", 4.3, "20 mins"),
    _item("butter-chicken", "3", "Butter Chicken",
          "Tender chicken in creamy tomato-based curry", 280, "North Indian",
          "north-indian", "/images/categories/chicken.jpg", 4.7, "30 mins", False),
    _item("masala-dosa", "3", "Masala Dosa",
          "Crispy rice crepe filled with spiced potato", 120, "South Indian",
          "south-indian", "/images/categories/South-indian.jpg", 4.4, "20 mins"),
    _item("idli-sambar", "3", "Idli Sambar", "Steamed rice cakes with lentil curry",
          100, "South Indian", "south-indian",
          "/images/categories/South-indian.jpg", 4.2, "15 mins"),
    _item("hakka-noodles", "3", "Hakka Noodles", "Stir-fried noodles with vegetables",
          160, "Chinese", "chinese", "/images/categories/Chinese.jpg", 4.1,
          "25 mins"),
    _item("manchurian", "3", "Veg Manchurian",
          "Deep-fried vegetable balls in tangy sauce", 140, "Chinese", "chinese",
          "/images/categories/Chinese.jpg", 4.0, "20 mins"),
]
