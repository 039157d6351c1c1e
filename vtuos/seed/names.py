"""Name pools and blood-type frequencies for generated residents."""

# Common American surnames from various backgrounds
SURNAMES = [
    "Adams", "Anderson", "Baker", "Barnes", "Bell", "Bennett", "Brooks",
    "Brown", "Butler", "Campbell", "Carter", "Chen", "Clark", "Collins",
    "Cooper", "Cruz", "Davis", "Diaz", "Edwards", "Evans", "Fisher",
    "Flores", "Foster", "Garcia", "Gonzalez", "Gray", "Green", "Hall",
    "Harris", "Hayes", "Henderson", "Hernandez", "Hill", "Howard", "Hughes",
    "Jackson", "James", "Jenkins", "Johnson", "Jones", "Kelly", "Kim",
    "King", "Lee", "Lewis", "Long", "Lopez", "Martin", "Martinez",
    "Miller", "Mitchell", "Moore", "Morgan", "Morris", "Murphy", "Nelson",
    "Nguyen", "Parker", "Patterson", "Perez", "Perry", "Peterson", "Phillips",
    "Powell", "Price", "Ramirez", "Reed", "Reyes", "Richardson", "Rivera",
    "Roberts", "Robinson", "Rodriguez", "Rogers", "Ross", "Russell", "Sanchez",
    "Sanders", "Scott", "Simmons", "Smith", "Stewart", "Sullivan", "Taylor",
    "Thomas", "Thompson", "Torres", "Turner", "Walker", "Ward", "Washington",
    "Watson", "White", "Williams", "Wilson", "Wood", "Wright", "Young",
]

MALE_GIVEN_NAMES = [
    "Aaron", "Adam", "Adrian", "Alan", "Albert", "Alexander", "Andrew",
    "Anthony", "Arthur", "Benjamin", "Brandon", "Brian", "Bruce", "Carl",
    "Charles", "Christopher", "Daniel", "David", "Dennis", "Donald", "Douglas",
    "Edward", "Eric", "Eugene", "Frank", "Gary", "George", "Gerald",
    "Gregory", "Harold", "Henry", "Howard", "Jack", "James", "Jason",
    "Jeffrey", "Jeremy", "Jesse", "John", "Jonathan", "Joseph", "Joshua",
    "Justin", "Keith", "Kenneth", "Kevin", "Larry", "Lawrence", "Louis",
    "Marcus", "Mark", "Martin", "Matthew", "Michael", "Nathan", "Nicholas",
    "Oscar", "Patrick", "Paul", "Peter", "Philip", "Ralph", "Raymond",
    "Richard", "Robert", "Roger", "Ronald", "Roy", "Russell", "Ryan",
    "Samuel", "Scott", "Sean", "Stephen", "Steven", "Thomas", "Timothy",
    "Victor", "Vincent", "Walter", "Wayne", "William", "Zachary",
]

FEMALE_GIVEN_NAMES = [
    "Abigail", "Alice", "Amanda", "Amy", "Andrea", "Angela", "Anna",
    "Barbara", "Betty", "Beverly", "Brenda", "Carol", "Carolyn", "Catherine",
    "Charlotte", "Christina", "Christine", "Cynthia", "Deborah", "Denise", "Diana",
    "Diane", "Dorothy", "Elizabeth", "Emily", "Emma", "Frances", "Gloria",
    "Grace", "Hannah", "Heather", "Helen", "Isabella", "Jacqueline", "Janet",
    "Janice", "Jean", "Jennifer", "Jessica", "Joan", "Joyce", "Judith",
    "Julia", "Julie", "Karen", "Katherine", "Kathleen", "Kathryn", "Kelly",
    "Kimberly", "Laura", "Lauren", "Linda", "Lisa", "Lori", "Louise",
    "Madison", "Margaret", "Maria", "Marie", "Marilyn", "Martha", "Mary",
    "Megan", "Melissa", "Michelle", "Nancy", "Nicole", "Olivia", "Pamela",
    "Patricia", "Rachel", "Rebecca", "Rose", "Ruth", "Samantha", "Sandra",
    "Sara", "Sarah", "Sharon", "Shirley", "Sophia", "Stephanie", "Susan",
    "Teresa", "Theresa", "Tiffany", "Virginia", "Wanda", "Wendy",
]

# Either sex
MIDDLE_NAMES = [
    "Alan", "Anne", "Benjamin", "Claire", "David", "Edward", "Elizabeth",
    "Frances", "Grace", "Henry", "James", "Jean", "John", "Joseph",
    "Katherine", "Lee", "Louise", "Lynn", "Mae", "Margaret", "Marie",
    "Michael", "Patricia", "Paul", "Ray", "Robert", "Rose", "Scott",
    "Thomas", "William",
]

# (blood type, relative frequency per 1000)
BLOOD_TYPE_WEIGHTS = [
    ("O+", 374),
    ("A+", 316),
    ("B+", 102),
    ("O-", 67),
    ("A-", 63),
    ("AB+", 34),
    ("B-", 25),
    ("AB-", 19),
]
