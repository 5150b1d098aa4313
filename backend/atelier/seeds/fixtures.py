"""Catalog used to populate development databases."""


def _product(name, description, category, price, status, stock, images, width, height, materials):
    return {
        "name": name,
        "description": description,
        "category": category,
        "price": price,
        "status": status,
        "stock_quantity": stock,
        "images": images,
        "dimensions": {"width": width, "height": height, "unit": "cm"},
        "materials": materials,
    }


def _unsplash(photo_id, detail=False):
    url = f"https://images.unsplash.com/photo-{photo_id}?w=800"
    return url + "&crop=detail" if detail else url


WALL_HANGINGS = [
    _product(
        "Sunset Dreams Macramé",
        "Handcrafted macramé wall hanging featuring warm sunset tones. Made with 100% "
        "natural cotton rope in shades of terracotta, gold, and cream.",
        "wall-hanging", 149.99, "available", 1,
        [_unsplash("1513694203232-719a280e022f"), _unsplash("1513694203232-719a280e022f", True)],
        60, 90, "Cotton rope, wooden dowel, natural dyes",
    ),
    _product(
        "Boho Fringe Wall Art",
        "Minimalist bohemian wall hanging with delicate fringe details. Perfect for modern "
        "interiors seeking a touch of warmth.",
        "wall-hanging", 89.99, "available", 2,
        [_unsplash("1595815771614-ade9d652a65d")],
        45, 70, "Organic cotton, bamboo stick",
    ),
    _product(
        "Nordic Geometric Tapestry",
        "Woven wall tapestry inspired by Nordic design patterns. Features clean geometric "
        "shapes in muted earth tones.",
        "wall-hanging", 199.99, "available", 1,
        [_unsplash("1578749556568-bc2c40e68b61"), _unsplash("1578749556568-bc2c40e68b61", True)],
        80, 100, "Wool, linen, cotton blend",
    ),
    _product(
        "Coastal Breeze Weaving",
        "Light and airy woven wall art reminiscent of ocean waves. Natural white and blue "
        "tones create a calming coastal vibe.",
        "wall-hanging", 129.99, "sold", 0,
        [_unsplash("1604514628550-37477afdf4e3")],
        50, 65, "Cotton, jute, indigo dye",
    ),
    _product(
        "Terra Cotta Dream Catcher",
        "Modern interpretation of traditional dream catcher design with earthy terracotta "
        "and cream tones.",
        "wall-hanging", 79.99, "available", 3,
        [_unsplash("1609743522471-83c84ce23e32")],
        35, 55, "Cotton cord, metal ring, feathers",
    ),
    _product(
        "Abstract Fiber Art",
        "Contemporary fiber art piece with abstract shapes and textures. A statement piece "
        "for modern art lovers.",
        "wall-hanging", 249.99, "draft", 0,
        [_unsplash("1582582621959-48d27397dc69")],
        70, 95, "Mixed fibers, wool roving, silk",
    ),
    _product(
        "Rainbow Macramé Small",
        "Cheerful small macramé with rainbow gradient. Perfect for nurseries or adding a pop "
        "of color to any room.",
        "wall-hanging", 59.99, "available", 5,
        [_unsplash("1618220179428-22790b461013")],
        30, 45, "Cotton rope, natural dyes",
    ),
    _product(
        "Minimalist Line Wall Art",
        "Ultra-minimal wall hanging featuring simple lines and neutral tones. "
        "Scandinavian-inspired design.",
        "wall-hanging", 99.99, "available", 2,
        [_unsplash("1615529182904-14819c35db37")],
        40, 60, "Linen, wooden dowel",
    ),
]

RUGS = [
    _product(
        "Moroccan Berber Rug",
        "Authentic handwoven Berber rug with traditional diamond patterns. Made by skilled "
        "artisans using centuries-old techniques.",
        "rug", 459.99, "available", 1,
        [_unsplash("1600607687920-4e2a09cf159d"), _unsplash("1600607687920-4e2a09cf159d", True)],
        160, 230, "Pure wool, natural dyes",
    ),
    _product(
        "Scandinavian Minimal Runner",
        "Sleek runner rug with subtle geometric pattern. Perfect for hallways or as a "
        "kitchen runner.",
        "rug", 189.99, "available", 2,
        [_unsplash("1584100936595-c0654b55a2e2")],
        70, 200, "Cotton, jute blend",
    ),
    _product(
        "Bohemian Kilim Rug",
        "Vibrant kilim rug with traditional Turkish patterns. Flat-woven for easy "
        "maintenance and versatile placement.",
        "rug", 329.99, "available", 1,
        [_unsplash("1558618666-fcd25c85cd64"), _unsplash("1558618666-fcd25c85cd64", True)],
        140, 200, "Wool, cotton warp",
    ),
    _product(
        "Natural Jute Round Rug",
        "Eco-friendly circular rug made from sustainable jute fibers. Adds organic texture "
        "to any space.",
        "rug", 149.99, "available", 4,
        [_unsplash("1563298723-dcfebaa392e3")],
        150, 150, "100% natural jute",
    ),
    _product(
        "Vintage Persian-Inspired Rug",
        "Luxurious rug inspired by classic Persian designs. Hand-knotted with intricate "
        "floral motifs.",
        "rug", 699.99, "sold", 0,
        [_unsplash("1634712282287-14ed57b9cc89"), _unsplash("1634712282287-14ed57b9cc89", True)],
        200, 300, "Wool, silk accents",
    ),
    _product(
        "Modern Abstract Area Rug",
        "Contemporary area rug with bold abstract design in navy and cream. Makes a "
        "statement in living rooms.",
        "rug", 389.99, "available", 2,
        [_unsplash("1595526114035-0d45ed16cfbf")],
        170, 240, "Wool, cotton blend",
    ),
    _product(
        "Cozy Shag Rug",
        "Plush high-pile shag rug in warm cream color. Ultra-soft underfoot, perfect for "
        "bedrooms.",
        "rug", 229.99, "available", 3,
        [_unsplash("1584622650111-993a426fbf0a")],
        160, 230, "Polyester, high-pile weave",
    ),
    _product(
        "Striped Cotton Dhurrie",
        "Lightweight dhurrie rug with classic stripe pattern. Reversible and easy to clean.",
        "rug", 119.99, "draft", 0,
        [_unsplash("1567016432779-094069958ea5")],
        120, 180, "100% cotton",
    ),
    _product(
        "Ethnic Tribal Runner",
        "Narrow runner featuring ethnic tribal patterns. Adds character to hallways and "
        "entryways.",
        "rug", 169.99, "available", 2,
        [_unsplash("1600607687644-c7171b42498b")],
        60, 180, "Wool, cotton",
    ),
    _product(
        "Pastel Tufted Rug",
        "Soft tufted rug in pastel pink and cream. Hand-tufted with plush texture, ideal for "
        "modern nurseries.",
        "rug", 279.99, "available", 1,
        [_unsplash("1585412727339-54e4bae3bbf9")],
        140, 200, "Wool, hand-tufted",
    ),
]


def all_products():
    return WALL_HANGINGS + RUGS
