"""
SkillSync career assessment content
Domains, quiz questions, career games, per-domain guidance and internship listings
"""
from score_ledger import QuizAnswerEvent, GameScoreEvent

# Declaration order is the tie-break order for recommendations
DOMAINS = [
    "SDE",
    "Data Analyst",
    "Cybersecurity",
    "Cloud",
    "Tester",
    "Product Manager",
]

DOMAIN_INFO = {
    "SDE": {
        "title": "Software Development Engineer",
        "roadmap": [
            "Master Data Structures & Algorithms",
            "Learn System Design Basics",
            "Build 3 Full-Stack Projects",
            "Practice Coding Interviews",
        ],
        "resources": [
            "FreeCodeCamp - Full Stack Development",
            "LeetCode - Algorithm Practice",
            "System Design Primer (GitHub)",
            "CS50 - Computer Science Fundamentals",
        ],
    },
    "Data Analyst": {
        "title": "Data Analyst",
        "roadmap": [
            "Master SQL and Database Concepts",
            "Learn Python/R for Data Analysis",
            "Study Statistics and Data Visualization",
            "Build Portfolio with Real Datasets",
        ],
        "resources": [
            "Kaggle Learn - Data Analysis",
            "Python for Data Analysis (Book)",
            "Tableau Public - Visualization",
            "Google Analytics Academy",
        ],
    },
    "Cybersecurity": {
        "title": "Cybersecurity Specialist",
        "roadmap": [
            "Learn Network Security Fundamentals",
            "Study Ethical Hacking Techniques",
            "Get Security Certifications (CompTIA)",
            "Practice on Capture The Flag Platforms",
        ],
        "resources": [
            "Cybrary - Free Security Training",
            "OWASP - Web Security",
            "TryHackMe - Hands-on Practice",
            "SANS Reading Room",
        ],
    },
    "Cloud": {
        "title": "Cloud Engineer",
        "roadmap": [
            "Learn AWS/Azure/GCP Fundamentals",
            "Master Infrastructure as Code",
            "Study DevOps and CI/CD Pipelines",
            "Get Cloud Certifications",
        ],
        "resources": [
            "AWS Free Tier - Hands-on Practice",
            "Terraform Documentation",
            "Docker and Kubernetes Tutorials",
            "Cloud Guru - Certification Prep",
        ],
    },
    "Tester": {
        "title": "Quality Assurance Engineer",
        "roadmap": [
            "Learn Manual Testing Fundamentals",
            "Master Test Automation Tools",
            "Study API and Performance Testing",
            "Build Testing Framework Projects",
        ],
        "resources": [
            "Selenium WebDriver Documentation",
            "Postman API Testing",
            "JMeter Performance Testing",
            "TestNG/JUnit Frameworks",
        ],
    },
    "Product Manager": {
        "title": "Product Manager",
        "roadmap": [
            "Learn Product Strategy and Roadmapping",
            "Study User Research and Analytics",
            "Master Agile and Scrum Methodologies",
            "Build Product Case Studies",
        ],
        "resources": [
            "Product School - PM Courses",
            "Google Analytics Certification",
            "Figma - Design Collaboration",
            "Mixpanel - Product Analytics",
        ],
    },
}

for _domain, _info in DOMAIN_INFO.items():
    _info["explanation"] = (
        f"Based on your quiz answers and game performance, you show strong alignment with "
        f"{_info['title']}. Your responses indicate good problem-solving skills and interest in this domain."
    )

# domain_scores[domain][i] is the delta for choosing options[i]
QUIZ_QUESTIONS = [
    {
        "id": 1,
        "question": "What type of problems do you enjoy solving the most?",
        "options": [
            "Building features users interact with",
            "Protecting systems from threats",
            "Finding patterns in large datasets",
            "Keeping services running at scale",
            "Breaking things to find what's wrong",
            "Deciding what should be built next",
        ],
        "domain_scores": {
            "SDE": [3, 0, 1, 1, 1, 1],
            "Data Analyst": [0, 0, 3, 1, 0, 1],
            "Cybersecurity": [0, 3, 1, 1, 2, 0],
            "Cloud": [1, 1, 0, 3, 0, 0],
            "Tester": [1, 1, 0, 0, 3, 0],
            "Product Manager": [1, 0, 1, 0, 0, 3],
        },
    },
    {
        "id": 2,
        "question": "Which work environment appeals to you most?",
        "options": [
            "Fast-moving product startup",
            "Government or security firm",
            "Research lab or analytics company",
            "Infrastructure team at a large tech company",
            "Quality lab shipping reliable releases",
            "Cross-functional team talking to customers",
        ],
        "domain_scores": {
            "SDE": [3, 0, 1, 2, 1, 1],
            "Data Analyst": [1, 1, 3, 0, 0, 1],
            "Cybersecurity": [0, 3, 1, 1, 0, 0],
            "Cloud": [1, 1, 0, 3, 1, 0],
            "Tester": [1, 0, 0, 1, 3, 0],
            "Product Manager": [2, 0, 1, 0, 0, 3],
        },
    },
    {
        "id": 3,
        "question": "What motivates you most in your work?",
        "options": [
            "Solving complex technical challenges",
            "Keeping systems and data secure",
            "Discovering insights from data",
            "Automating everything that can be automated",
            "Shipping software without bugs",
            "Reaching millions of happy users",
        ],
        "domain_scores": {
            "SDE": [3, 0, 1, 2, 1, 1],
            "Data Analyst": [1, 0, 3, 0, 0, 1],
            "Cybersecurity": [1, 3, 0, 1, 1, 0],
            "Cloud": [1, 1, 0, 3, 0, 1],
            "Tester": [1, 1, 0, 1, 3, 0],
            "Product Manager": [0, 0, 1, 0, 1, 3],
        },
    },
]

# Deltas are awarded by outcome: score >= PASS_SCORE earns "pass_scores"
PASS_SCORE = 70

CAREER_GAMES = [
    {
        "id": "bug-buster",
        "title": "Bug Buster",
        "description": "Find and fix code bugs to test your debugging skills",
        "domain": "Tester",
        "pass_scores": {"SDE": 15, "Tester": 8},
        "fail_scores": {"SDE": 5, "Tester": 3},
    },
    {
        "id": "code-match",
        "title": "Code Match",
        "description": "Match programming concepts with their definitions",
        "domain": "SDE",
        "pass_scores": {"SDE": 12, "Cloud": 8},
        "fail_scores": {"SDE": 4, "Cloud": 2},
    },
    {
        "id": "cyber-chase",
        "title": "Cyber Chase",
        "description": "Identify security threats and vulnerabilities",
        "domain": "Cybersecurity",
        "pass_scores": {"Cybersecurity": 16, "Cloud": 8},
        "fail_scores": {"Cybersecurity": 6, "Cloud": 3},
    },
    {
        "id": "data-detective",
        "title": "Data Detective",
        "description": "Analyze patterns and trends in datasets",
        "domain": "Data Analyst",
        "pass_scores": {"Data Analyst": 16, "Product Manager": 8},
        "fail_scores": {"Data Analyst": 6, "Product Manager": 3},
    },
    {
        "id": "web-builder",
        "title": "Web Builder Sprint",
        "description": "Build responsive web layouts quickly",
        "domain": "SDE",
        "pass_scores": {"SDE": 15, "Tester": 8},
        "fail_scores": {"SDE": 5, "Tester": 3},
    },
    {
        # The chosen career path earns CAREER_SIM_CHOICE_SCORE on top of pass/fail
        "id": "career-sim",
        "title": "Career Simulator",
        "description": "Make career decisions and see outcomes",
        "domain": None,
        "pass_scores": {"Product Manager": 10},
        "fail_scores": {"Product Manager": 5},
    },
]

CAREER_SIM_CHOICE_SCORE = 15

INTERNSHIPS = [
    {
        "id": "flipkart-swe",
        "company": "Flipkart",
        "role": "Software Engineering Intern",
        "location": "Bengaluru, India | Hybrid",
        "stipend": "₹40,000/month",
        "duration": "6 months",
        "domain": "SDE",
        "skills": ["Java", "Python", "React", "Microservices"],
        "apply_url": "https://www.flipkartcareers.com",
    },
    {
        "id": "zomato-product",
        "company": "Zomato",
        "role": "Product Management Intern",
        "location": "Gurugram, India | Remote",
        "stipend": "₹35,000/month",
        "duration": "4 months",
        "domain": "Product Manager",
        "skills": ["Product Strategy", "Data Analysis", "User Research", "SQL"],
        "apply_url": "https://www.zomato.com/careers",
    },
    {
        "id": "paytm-data",
        "company": "Paytm",
        "role": "Data Science Intern",
        "location": "Noida, India | Hybrid",
        "stipend": "₹45,000/month",
        "duration": "6 months",
        "domain": "Data Analyst",
        "skills": ["Python", "SQL", "Machine Learning", "Financial Analytics"],
        "apply_url": "https://jobs.paytm.com",
    },
    {
        "id": "razorpay-security",
        "company": "Razorpay",
        "role": "Security Engineering Intern",
        "location": "Bengaluru, India | On-site",
        "stipend": "₹42,000/month",
        "duration": "6 months",
        "domain": "Cybersecurity",
        "skills": ["Network Security", "Python", "OWASP", "Linux"],
        "apply_url": "https://razorpay.com/jobs",
    },
    {
        "id": "freshworks-cloud",
        "company": "Freshworks",
        "role": "Cloud Infrastructure Intern",
        "location": "Chennai, India | Hybrid",
        "stipend": "₹38,000/month",
        "duration": "6 months",
        "domain": "Cloud",
        "skills": ["AWS", "Docker", "Kubernetes", "Terraform"],
        "apply_url": "https://www.freshworks.com/company/careers",
    },
    {
        "id": "browserstack-qa",
        "company": "BrowserStack",
        "role": "QA Automation Intern",
        "location": "Mumbai, India | Remote",
        "stipend": "₹30,000/month",
        "duration": "3 months",
        "domain": "Tester",
        "skills": ["Selenium", "JavaScript", "API Testing", "CI/CD"],
        "apply_url": "https://www.browserstack.com/careers",
    },
]


def domain_for_field(field):
    """Resolve a domain key or a display title (case-insensitive) to a domain key"""
    if not isinstance(field, str):
        return None
    wanted = field.strip().lower()
    for domain in DOMAINS:
        if wanted == domain.lower() or wanted == DOMAIN_INFO[domain]["title"].lower():
            return domain
    return None


def internship_fit_score(skills, user_skills):
    """Percentage of listing skills the user covers, kept within 25-100"""
    if not user_skills:
        return 50
    if not skills:
        return 25

    matched = 0
    for skill in skills:
        s = skill.lower()
        if any(s in u.lower() or u.lower() in s for u in user_skills if u):
            matched += 1

    skills_score = matched / len(skills) * 100
    return int(max(25, min(100, skills_score)) + 0.5)


class CareerAssessment:
    """Turns quiz picks and game outcomes into ledger events"""

    def __init__(self):
        self.questions = {q["id"]: q for q in QUIZ_QUESTIONS}
        self.games = {g["id"]: g for g in CAREER_GAMES}

    def quiz_answer_event(self, question_id, option_index):
        question = self.questions.get(question_id)
        if question is None:
            raise ValueError(f"Unknown question id: {question_id}")
        if not 0 <= option_index < len(question["options"]):
            raise ValueError(f"Option index {option_index} out of range for question {question_id}")

        delta = {domain: scores[option_index] for domain, scores in question["domain_scores"].items()}
        return QuizAnswerEvent(
            question_id=question_id,
            chosen_option_index=option_index,
            per_domain_delta=delta,
        )

    def game_score_event(self, game_id, score, choice=None):
        game = self.games.get(game_id)
        if game is None:
            raise ValueError(f"Unknown game id: {game_id}")
        if not 0 <= score <= 100:
            raise ValueError("Game score must be between 0 and 100")

        delta = dict(game["pass_scores"] if score >= PASS_SCORE else game["fail_scores"])
        if game_id == "career-sim":
            domain = domain_for_field(choice)
            if domain is None:
                raise ValueError("Career simulator needs a career path choice")
            delta[domain] = delta.get(domain, 0) + CAREER_SIM_CHOICE_SCORE

        return GameScoreEvent(game_id=game_id, score=score, per_domain_delta=delta)

    def answer_text(self, event):
        """Option text for a recorded quiz answer, used when prompting"""
        question = self.questions.get(event.question_id)
        if question is None or not 0 <= event.chosen_option_index < len(question["options"]):
            return f"option {event.chosen_option_index}"
        return question["options"][event.chosen_option_index]
