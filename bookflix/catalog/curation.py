"""Hand-picked search queries behind the catalog shelves.

Curated seed queries each name one well-known title and resolve to a single
book with reliable cover art. The other tables map a shelf key to one
free-text search.
"""

CURATED_BOOK_QUERIES: dict[str, list[str]] = {
    "horror": [
        "Dracula Bram Stoker",
        "The Shining Stephen King",
        "It Stephen King",
        "The Haunting of Hill House Shirley Jackson",
        "Bird Box Josh Malerman",
    ],
    "fiction": [
        "The Alchemist Paulo Coelho",
        "To Kill a Mockingbird Harper Lee",
        "The Kite Runner Khaled Hosseini",
        "Life of Pi Yann Martel",
        "The Old Man and the Sea Ernest Hemingway",
    ],
    "mystery": [
        "Sherlock Holmes Hound of the Baskervilles Arthur Conan Doyle",
        "The Girl with the Dragon Tattoo Stieg Larsson",
        "Gone Girl Gillian Flynn",
        "The Da Vinci Code Dan Brown",
        "Murder on the Orient Express Agatha Christie",
    ],
    "romance": [
        "Pride and Prejudice Jane Austen",
        "Me Before You Jojo Moyes",
        "The Notebook Nicholas Sparks",
        "It Ends With Us Colleen Hoover",
        "Love & Other Words Christina Lauren",
    ],
    "science-fiction": [
        "Dune Frank Herbert",
        "1984 George Orwell",
        "The Martian Andy Weir",
        "Enders Game Orson Scott Card",
        "Neuromancer William Gibson",
    ],
    "fantasy": [
        "Harry Potter Sorcerers Stone J.K. Rowling",
        "The Lord of the Rings J.R.R. Tolkien",
        "A Song of Ice and Fire George R.R. Martin",
        "The Hobbit J.R.R. Tolkien",
        "The Name of the Wind Patrick Rothfuss",
    ],
    "thriller": [
        "The Silent Patient Alex Michaelides",
        "The Girl on the Train Paula Hawkins",
        "Shutter Island Dennis Lehane",
        "The Bourne Identity Robert Ludlum",
        "The Da Vinci Code Dan Brown",
    ],
    "historical": [
        "The Book Thief Markus Zusak",
        "War and Peace Leo Tolstoy",
        "All the Light We Cannot See Anthony Doerr",
        "The Pillars of the Earth Ken Follett",
        "The Nightingale Kristin Hannah",
    ],
    "adventure": [
        "Treasure Island Robert Louis Stevenson",
        "The Call of the Wild Jack London",
        "Robinson Crusoe Daniel Defoe",
        "Life of Pi Yann Martel",
        "Into the Wild Jon Krakauer",
    ],
    "comics": [
        "Watchmen Alan Moore",
        "Batman The Killing Joke Alan Moore",
        "Spider-Man Blue Jeph Loeb",
        "Sandman Neil Gaiman",
        "Maus Art Spiegelman",
    ],
}

CURATED_COMIC_QUERIES: dict[str, list[str]] = {
    "marvel": [
        "Amazing Spider-Man Marvel",
        "Avengers Marvel Comics",
        "X-Men Marvel Comics",
        "Iron Man Marvel Comics",
        "Captain America Marvel",
        "Thor Marvel Comics",
        "Guardians of the Galaxy Marvel",
        "Black Panther Marvel",
    ],
    "dc": [
        "Batman DC Comics",
        "Superman DC Comics",
        "Wonder Woman DC Comics",
        "Justice League DC",
        "The Flash DC Comics",
        "Green Lantern DC Comics",
        "Aquaman DC Comics",
        "Harley Quinn DC",
    ],
    "manga": [
        "Naruto manga",
        "One Piece manga",
        "Attack on Titan manga",
        "Dragon Ball manga",
        "Death Note manga",
        "My Hero Academia manga",
        "Demon Slayer manga",
        "One Punch Man manga",
    ],
    "superhero": [
        "Watchmen Alan Moore",
        "Batman The Killing Joke Alan Moore",
        "Spider-Man Blue Jeph Loeb",
        "Sandman Neil Gaiman",
        "Maus Art Spiegelman",
        "Spider-Man comic",
        "Batman comic",
        "Superman comic",
    ],
}

CATEGORY_QUERIES: dict[str, str] = {
    "fiction": "subject:fiction -subject:comics -subject:manga",
    "mystery": "subject:mystery OR subject:detective -subject:comics",
    "romance": 'subject:romance OR subject:"love story" -subject:comics',
    "science-fiction": 'subject:"science fiction" OR subject:sci-fi -subject:comics',
    "fantasy": "subject:fantasy -subject:comics -subject:manga",
    "thriller": "subject:thriller OR subject:suspense -subject:comics",
    "historical": 'subject:"historical fiction" OR subject:history -subject:comics',
    "adventure": "subject:adventure OR subject:action -subject:comics -subject:manga",
    "biography": "subject:biography OR subject:memoir",
    "self-help": 'subject:"self help" OR subject:"personal development"',
    "business": "subject:business OR subject:economics",
    "health": "subject:health OR subject:fitness OR subject:wellness",
    "cooking": "subject:cooking OR subject:recipes OR subject:food",
    "travel": "subject:travel OR subject:guide",
    "comics": 'subject:comics OR subject:"graphic novel"',
    "manga": 'subject:manga OR subject:"japanese comics"',
    "superhero": 'subject:superhero OR subject:"comic book" OR subject:"super hero"',
}

MOOD_QUERIES: dict[str, str] = {
    "emotional": "emotional OR heartwarming OR touching -subject:comics",
    "dark": "dark OR thriller OR mystery -subject:comics",
    "hopeful": "inspirational OR uplifting OR hope -subject:comics",
    "adventurous": "adventure OR action OR journey -subject:comics",
    "romantic": 'romance OR "love story" -subject:comics',
    "mysterious": "mystery OR detective OR suspense -subject:comics",
}

PUBLISHER_QUERIES: dict[str, str] = {
    "marvel": "marvel comics OR marvel universe OR spider-man OR avengers OR x-men",
    "dc": "dc comics OR batman OR superman OR wonder woman OR justice league",
    "dark-horse": "dark horse comics OR hellboy OR sin city",
    "image": "image comics OR walking dead OR saga comic",
    "manga": 'manga OR "japanese comics" OR naruto OR "one piece" OR "attack on titan"',
}

TRENDING_QUERIES: list[str] = [
    "bestseller 2024 -subject:comics",
    "popular fiction 2024",
    "award winning books 2024",
    "new releases fiction",
    "bestselling novels",
]

SUPERHERO_QUERIES: list[str] = [
    "batman comics",
    "superman comics",
    "spider-man comics",
    "avengers comics",
    "justice league comics",
    "x-men comics",
]

# Shelf key -> display name, in display order.
POPULAR_CATEGORIES: dict[str, str] = {
    "fiction": "Popular Fiction",
    "mystery": "Mystery & Thriller",
    "romance": "Romance",
    "fantasy": "Fantasy",
    "science-fiction": "Science Fiction",
    "biography": "Biography",
}

HOME_CATEGORIES: dict[str, str] = {
    "fiction": "Popular Fiction",
    "mystery": "Mystery & Detective",
    "romance": "Romance",
    "fantasy": "Fantasy",
    "science-fiction": "Science Fiction",
    "thriller": "Thriller & Suspense",
    "horror": "Horror",
    "historical": "Historical Fiction",
    "adventure": "Adventure",
}

HOME_MOODS: list[str] = ["emotional", "dark", "hopeful", "adventurous"]


def category_query(category: str) -> str:
    return CATEGORY_QUERIES.get(category, f"subject:{category}")


def mood_query(mood: str) -> str:
    return MOOD_QUERIES.get(mood, mood)


def publisher_query(publisher: str) -> str:
    return PUBLISHER_QUERIES.get(publisher, f"{publisher} comics")
