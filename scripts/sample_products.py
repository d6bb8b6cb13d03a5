# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-10
# Description: sample_products.py
# -----------------------------------------------------------------------------
from typing import Any, Dict, List

SAMPLE_PRODUCTS: List[Dict[str, Any]] = [
    # Electronics
    {
        "name": "Sony WH-1000XM4 Wireless Headphones",
        "description": "Industry-leading noise canceling with Dual Noise Sensor technology. Up to 30-hour battery life with quick charge.",
        "sku": "SONY-WH1000XM4-BLK",
        "price": 349.99,
        "quantity": 25,
        "category": "Electronics",
        "brand": "Sony",
        "image_url": "https://example.com/sony-headphones.jpg",
        "tags": ["wireless", "noise-canceling", "bluetooth", "premium"],
        "search_keywords": "headphones wireless noise canceling premium audio"
    },
    {
        "name": "Apple iPhone 15 Pro",
        "description": "iPhone 15 Pro with titanium design, A17 Pro chip, and advanced camera system with 5x telephoto zoom.",
        "sku": "APPLE-IP15PRO-128-NT",
        "price": 999.99,
        "quantity": 15,
        "category": "Electronics",
        "brand": "Apple",
        "image_url": "https://example.com/iphone-15-pro.jpg",
        "tags": ["smartphone", "5g", "camera", "titanium"],
        "search_keywords": "iphone apple smartphone mobile phone camera"
    },
    {
        "name": "Samsung 65\" QLED 4K Smart TV",
        "description": "Quantum Dot technology delivers vibrant colors and crisp details. Smart TV with built-in streaming apps.",
        "sku": "SAMSUNG-QN65Q80C",
        "price": 1299.99,
        "quantity": 8,
        "category": "Electronics",
        "brand": "Samsung",
        "image_url": "https://example.com/samsung-tv.jpg",
        "tags": ["tv", "4k", "smart", "qled", "65-inch"],
        "search_keywords": "television tv smart 4k uhd samsung qled"
    },
  
    # Clothing
    {
        "name": "Nike Air Max 270 Running Shoes",
        "description": "Comfortable running shoes with visible Air Max unit in the heel for lightweight cushioning.",
        "sku": "NIKE-AM270-BLK-10",
        "price": 149.99,
        "quantity": 30,
        "category": "Clothing",
        "brand": "Nike",
        "image_url": "https://example.com/nike-air-max.jpg",
        "tags": ["shoes", "running", "athletic", "air-max"],
        "search_keywords": "running shoes nike athletic footwear sports"
    },
    {
        "name": "Levi's 501 Original Fit Jeans",
        "description": "Classic straight fit jeans with the iconic 501 styling. Made from 100% cotton denim.",
        "sku": "LEVIS-501-BLUE-32X32",
        "price": 79.99,
        "quantity": 45,
        "category": "Clothing",
        "brand": "Levi's",
        "image_url": "https://example.com/levis-jeans.jpg",
        "tags": ["jeans", "denim", "classic", "cotton"],
        "search_keywords": "jeans denim pants levis clothing casual"
    },
    {
        "name": "Patagonia Better Sweater Fleece Jacket",
        "description": "Warm fleece jacket made from recycled polyester. Perfect for outdoor activities and layering.",
        "sku": "PATA-FLEECE-GRY-L",
        "price": 99.99,
        "quantity": 20,
        "category": "Clothing",
        "brand": "Patagonia",
        "image_url": "https://example.com/patagonia-fleece.jpg",
        "tags": ["jacket", "fleece", "outdoor", "recycled"],
        "search_keywords": "jacket fleece outdoor patagonia warm clothing"
    },

    # Home & Garden
    {
        "name": "Instant Pot Duo 7-in-1 Electric Pressure Cooker",
        "description": "Multi-functional cooker: pressure cooker, slow cooker, rice cooker, steamer, sauté, yogurt maker, and warmer.",
        "sku": "INSTANT-DUO-6QT",
        "price": 89.99,
        "quantity": 35,
        "category": "Home & Garden",
        "brand": "Instant Pot",
        "image_url": "https://example.com/instant-pot.jpg",
        "tags": ["kitchen", "pressure-cooker", "multi-function", "cooking"],
        "search_keywords": "pressure cooker instant pot kitchen appliance cooking"
    },
    {
        "name": "Dyson V8 Animal Cordless Vacuum",
        "description": "Powerful cordless vacuum with up to 40 minutes of run time. Designed for homes with pets.",
        "sku": "DYSON-V8-ANIMAL",
        "price": 399.99,
        "quantity": 12,
        "category": "Home & Garden",
        "brand": "Dyson",
        "image_url": "https://example.com/dyson-vacuum.jpg",
        "tags": ["vacuum", "cordless", "pet-hair", "cleaning"],
        "search_keywords": "vacuum cleaner dyson cordless pet hair cleaning"
    },
    {
        "name": "Philips Hue Smart LED Bulb Starter Kit",
        "description": "Smart LED bulbs with millions of colors. Control with smartphone app or voice commands.",
        "sku": "PHILIPS-HUE-START-4PK",
        "price": 179.99,
        "quantity": 22,
        "category": "Home & Garden",
        "brand": "Philips",
        "image_url": "https://example.com/philips-hue.jpg",
        "tags": ["smart-home", "led", "lighting", "color-changing"],
        "search_keywords": "smart bulbs led lighting philips hue home automation"
    },

    # Sports & Outdoors
    {
        "name": "YETI Rambler 20oz Tumbler",
        "description": "Double-wall vacuum insulated tumbler keeps drinks cold or hot for hours. Dishwasher safe.",
        "sku": "YETI-RAMBLER-20OZ-SS",
        "price": 34.99,
        "quantity": 50,
        "category": "Sports & Outdoors",
        "brand": "YETI",
        "image_url": "https://example.com/yeti-tumbler.jpg",
        "tags": ["tumbler", "insulated", "stainless-steel", "outdoor"],
        "search_keywords": "tumbler water bottle yeti insulated outdoor drinkware"
    },
    {
        "name": "REI Co-op Flash 22 Hiking Backpack",
        "description": "Lightweight day pack with 22-liter capacity. Perfect for hiking, travel, and everyday use.",
        "sku": "REI-FLASH22-GRN",
        "price": 49.99,
        "quantity": 18,
        "category": "Sports & Outdoors",
        "brand": "REI Co-op",
        "image_url": "https://example.com/rei-backpack.jpg",
        "tags": ["backpack", "hiking", "daypack", "lightweight"],
        "search_keywords": "backpack hiking daypack rei outdoor travel"
    },

    # Books
    {
        "name": "Atomic Habits by James Clear",
        "description": "Practical guide to building good habits and breaking bad ones with proven strategies.",
        "sku": "BOOK-ATOMIC-HABITS",
        "price": 16.99,
        "quantity": 40,
        "category": "Books",
        "brand": "Avery",
        "image_url": "https://example.com/atomic-habits.jpg",
        "tags": ["self-help", "productivity", "habits", "bestseller"],
        "search_keywords": "book habits productivity self help james clear"
    },
    {
        "name": "The Seven Husbands of Evelyn Hugo",
        "description": "A captivating novel about a reclusive Hollywood icon who finally decides to tell her story.",
        "sku": "BOOK-EVELYN-HUGO",
        "price": 14.99,
        "quantity": 25,
        "category": "Books",
        "brand": "Atria Books",
        "image_url": "https://example.com/evelyn-hugo.jpg",
        "tags": ["fiction", "novel", "hollywood", "bestseller"],
        "search_keywords": "book fiction novel taylor jenkins reid bestseller"
    },

    # Health & Beauty
    {
        "name": "CeraVe Daily Moisturizing Lotion",
        "description": "Lightweight moisturizer with hyaluronic acid and ceramides for 24-hour hydration.",
        "sku": "CERAVE-LOTION-16OZ",
        "price": 12.99,
        "quantity": 60,
        "category": "Health & Beauty",
        "brand": "CeraVe",
        "image_url": "https://example.com/cerave-lotion.jpg",
        "tags": ["skincare", "moisturizer", "hyaluronic-acid", "sensitive-skin"],
        "search_keywords": "moisturizer lotion skincare cerave hydration"
    },
    {
        "name": "Oral-B Pro 1000 Electric Toothbrush",
        "description": "Electric toothbrush with oscillating, rotating, and pulsating movements for superior plaque removal.",
        "sku": "ORALB-PRO1000-BLU",
        "price": 39.99,
        "quantity": 28,
        "category": "Health & Beauty",
        "brand": "Oral-B",
        "image_url": "https://example.com/oral-b-toothbrush.jpg",
        "tags": ["electric-toothbrush", "dental-care", "plaque-removal"],
        "search_keywords": "electric toothbrush oral b dental care teeth cleaning"
    },

    # Toys & Games
    {
        "name": "LEGO Creator 3-in-1 Deep Sea Creatures",
        "description": "Build a shark, squid, or angler fish with this creative 3-in-1 LEGO set. 230 pieces included.",
        "sku": "LEGO-31088-CREATURES",
        "price": 15.99,
        "quantity": 35,
        "category": "Toys & Games",
        "brand": "LEGO",
        "image_url": "https://example.com/lego-sea-creatures.jpg",
        "tags": ["lego", "building", "3-in-1", "sea-creatures"],
        "search_keywords": "lego building blocks toys creative construction"
    },

    # Low stock and out of stock
    {
        "name": "Limited Edition Gaming Headset",
        "description": "High-end gaming headset with surround sound and RGB lighting. Limited availability.",
        "sku": "GAME-HEADSET-LTD",
        "price": 199.99,
        "quantity": 2,
        "category": "Electronics",
        "brand": "GameTech",
        "image_url": "https://example.com/gaming-headset.jpg",
        "tags": ["gaming", "headset", "limited-edition", "rgb"],
        "search_keywords": "gaming headset limited edition rgb surround sound"
    },
    {
        "name": "Vintage Style Camera",
        "description": "Retro-inspired instant camera for capturing memories in vintage style.",
        "sku": "VINTAGE-CAM-001",
        "price": 89.99,
        "quantity": 0,
        "category": "Electronics",
        "brand": "RetroTech",
        "image_url": "https://example.com/vintage-camera.jpg",
        "tags": ["camera", "vintage", "instant", "retro"],
        "search_keywords": "camera vintage instant retro photography"
    }
]
