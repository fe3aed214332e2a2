"""Standard packages and FAQs loaded by seed_knowledge_base.py"""

STANDARD_INCLUSIONS = (
    "It includes premium AE Solar panels with 30-year warranty, Solis/Deye inverter with 5-year "
    "warranty, complete installation, and 2 years free maintenance."
)
BATTERY_INCLUSIONS = (
    "It includes premium AE Solar panels with 30-year warranty, Solis/Deye inverter with 5-year "
    "warranty, LVTOPSUN battery with 5-year warranty, complete installation, and 2 years free maintenance."
)

PACKAGES = [
    {
        "code": "ONG-2K-P1",
        "name": "OnGrid Basic Package",
        "description": f"This package is perfect for homes with low electricity consumption. {STANDARD_INCLUSIONS}",
        "type": "ongrid",
        "wattage": 2320,
        "suitable_for": "Suitable for monthly bills around ₱2,500 and below",
        "financing_price": 124880,
        "srp_price": 111500,
        "cash_price": 104800,
    },
    {
        "code": "ONG-3K-P2",
        "name": "OnGrid Medium Package",
        "description": (
            "This mid-sized OnGrid system provides excellent value for homes with moderate "
            f"electricity usage. {STANDARD_INCLUSIONS}"
        ),
        "type": "ongrid",
        "wattage": 3480,
        "suitable_for": "Suitable for monthly bills ₱2,500-₱4,000",
        "financing_price": 171360,
        "srp_price": 153000,
        "cash_price": 143800,
    },
    {
        "code": "ONG-6K-P4",
        "name": "OnGrid Large Package",
        "description": (
            "This powerful OnGrid system is ideal for homes with moderate to high electricity "
            f"consumption. {STANDARD_INCLUSIONS}"
        ),
        "type": "ongrid",
        "wattage": 5800,
        "suitable_for": "Suitable for monthly bills ₱3,000-₱6,000",
        "financing_price": 258720,
        "srp_price": 231000,
        "cash_price": 216800,
    },
    {
        "code": "HYB-3K-P1",
        "name": "Hybrid Small Battery Package",
        "description": (
            "This hybrid system with 5.12kWh battery provides backup power during outages and "
            f"reduces nighttime grid consumption. {BATTERY_INCLUSIONS}"
        ),
        "type": "hybrid-small",
        "wattage": 3480,
        "suitable_for": "Suitable for monthly bills ₱2,500-₱4,000",
        "financing_price": 310800,
        "srp_price": 277300,
        "cash_price": 260800,
    },
    {
        "code": "HYB-10K-P2",
        "name": "Hybrid Large Battery Package",
        "description": (
            "This premium hybrid system with 10.24kWh battery provides extended backup power "
            f"during outages and significantly reduces grid dependency. {BATTERY_INCLUSIONS}"
        ),
        "type": "hybrid-large",
        "wattage": 9860,
        "suitable_for": "Suitable for monthly bills ₱8,000-₱10,000",
        "financing_price": 756000,
        "srp_price": 674800,
        "cash_price": 634300,
    },
]

FAQS = [
    {
        "faq_id": "installment-plans",
        "question": "Do you offer installment plans?",
        "answer": (
            "**Yes!** We offer flexible installment plans through our partner financing institutions:\n\n"
            "- **SB Finance** (3 Years)\n- **BPI** (5 Years)\n\n"
            "Our team will guide you through the application process, including the required documentation."
        ),
        "keywords": ["installment", "payment", "plan", "financing", "loan", "credit", "pay", "monthly"],
    },
    {
        "faq_id": "how-to-avail",
        "question": "How to avail your installment plans?",
        "answer": (
            "We're more than happy to help and guide you through the process. Here's the list of "
            "requirements: Valid ID, Proof of Income, and Proof of Billing."
        ),
        "keywords": ["avail", "how", "process", "requirements", "installment", "apply"],
    },
    {
        "faq_id": "quotation",
        "question": "Can I ask for a quotation?",
        "answer": (
            "Yes! You can request a free quotation. Share your latest MERALCO bill, roof type "
            "(concrete, metal tin or yero), and exact address, and we'll provide you with a customized proposal."
        ),
        "keywords": ["quotation", "quote", "cost", "estimate", "proposal"],
    },
    {
        "faq_id": "savings",
        "question": "How much money will I save with Solar?",
        "answer": (
            "Savings vary based on your energy usage, solar system size, and location. Typically, "
            "customers save 30-70% on their electricity bills."
        ),
        "keywords": ["save", "savings", "money", "bill", "return", "roi"],
    },
    {
        "faq_id": "zero-bill",
        "question": "Can I get Zero Bill?",
        "answer": (
            'Achieving a "Zero Bill" is possible under specific conditions, such as using an adequately '
            "sized solar setup with battery that fully offsets your consumption and participating in net metering."
        ),
        "keywords": ["zero", "bill", "free", "nothing", "no bill", "eliminate"],
    },
    {
        "faq_id": "location",
        "question": "Where are you located?",
        "answer": (
            "We are located at No.30-C Westbend Arcade, Dona Soledad Avenue, Paranaque City. "
            "You can call us at (02) 8831-7330 or (0960) 471-6968."
        ),
        "keywords": ["location", "where", "address", "office", "based", "city", "contact", "phone", "number"],
    },
    {
        "faq_id": "system-difference",
        "question": "What's the difference between On-Grid and Hybrid System?",
        "answer": (
            "**On-Grid Systems:**\n- Uses both your energy supplier (e.g., Meralco) at night and solar "
            "power for daytime\n- More affordable initial investment\n- No backup during power outages\n\n"
            "**Hybrid Systems:**\n- Uses solar power during daytime and battery during nighttime\n"
            "- Provides backup power during outages\n- Higher initial investment but greater energy independence"
        ),
        "keywords": ["difference", "on-grid", "hybrid", "system", "compare", "battery", "backup"],
    },
    {
        "faq_id": "night-operation",
        "question": "Will solar panels work at night?",
        "answer": (
            "On-grid systems rely on sunlight and **do not work at night** unless paired with batteries. "
            "For 24/7 solar power, we recommend our hybrid systems with battery storage."
        ),
        "keywords": ["night", "dark", "evening", "work", "operate", "function", "after sunset"],
    },
    {
        "faq_id": "power-outage",
        "question": "What happens during a power outage?",
        "answer": (
            "**On-grid systems** automatically shut down during outages for safety reasons.\n\n"
            "**Hybrid systems** with batteries can provide backup power during outages, keeping "
            "essential appliances running."
        ),
        "keywords": ["outage", "blackout", "brownout", "power", "electricity", "backup", "battery"],
    },
    {
        "faq_id": "cloudy-days",
        "question": "Will solar panels work during cloudy days or rainy weather?",
        "answer": "Yes but the power produced may be reduced compared to sunny days.",
        "keywords": ["cloudy", "rainy", "weather", "work", "effective", "sun"],
    },
    {
        "faq_id": "maintenance",
        "question": "How much maintenance do solar panels require?",
        "answer": (
            "Solar panels require minimal maintenance at least once a year. Regular cleaning to remove "
            "dust and debris is sufficient. Our team offers maintenance services upon installation."
        ),
        "keywords": ["maintenance", "clean", "upkeep", "service", "required"],
    },
    {
        "faq_id": "warranty",
        "question": "How about your warranty?",
        "answer": (
            "We offer comprehensive warranties on all components:\n\n"
            "- **30-year warranty** on AE Solar panels (German brand)\n"
            "- **5-year warranty** on Solis/Deye inverters\n"
            "- **5-year warranty** on LVTOPSUN batteries\n"
            "- **2-year warranty** on workmanship"
        ),
        "keywords": ["warranty", "guarantee", "cover", "protection", "years"],
    },
    {
        "faq_id": "installation-time",
        "question": "How long does it take to install a solar power system?",
        "answer": "Installation typically takes 1-2 days for residential systems. Larger systems may take longer.",
        "keywords": ["install", "time", "long", "take", "duration", "days"],
    },
    {
        "faq_id": "roof-space",
        "question": "How much roof space do I need for a solar installation?",
        "answer": "For every 3kW system, it requires 8sqm.",
        "keywords": ["space", "roof", "area", "size", "fit", "square", "meter"],
    },
    {
        "faq_id": "net-metering",
        "question": "What's net metering and how does it work?",
        "answer": (
            "Net metering allows you to sell excess energy to your electric company and this will be "
            "subtracted on your next bill, effectively reducing your electricity costs."
        ),
        "keywords": ["net", "metering", "meter", "sell", "excess", "credit"],
    },
    {
        "faq_id": "payback",
        "question": "What is the payback period?",
        "answer": "The payback period is typically 4-5 years, depending on your energy savings and system cost.",
        "keywords": ["payback", "return", "roi", "investment", "recover"],
    },
    {
        "faq_id": "battery-need",
        "question": "Do I need a battery for my solar power system?",
        "answer": (
            "Batteries are optional for on-grid systems but essential for hybrid setups, especially if "
            "you want backup power during outages or utilize solar energy produced at night."
        ),
        "keywords": ["battery", "need", "required", "necessary", "storage", "backup"],
    },
    {
        "faq_id": "service-locations",
        "question": "Do you offer your services in (location)?",
        "answer": (
            "We serve Metro Manila and Central Luzon. Note that prices are for Metro Manila installation "
            "only, with additional transport costs for areas outside Metro Manila."
        ),
        "keywords": ["service", "location", "area", "serve", "province", "city", "metro manila", "luzon"],
    },
    {
        "faq_id": "brands-used",
        "question": "What brands do you use?",
        "answer": (
            "We use only premium, reliable brands with excellent warranties:\n\n"
            "- **Solar Panels**: AE Solar (German brand with 30 years warranty)\n"
            "- **Inverters**: Solis or Deye (5 years warranty)\n"
            "- **Batteries**: LVTOPSUN (5 years warranty)"
        ),
        "keywords": ["brand", "manufacturer", "make", "quality", "panel", "inverter", "battery"],
    },
    {
        "faq_id": "contact-info",
        "question": "How can I contact you?",
        "answer": (
            "You can reach us at our office: 30-C Westbend Arcade, Doña Soledad Ave, Parañaque City. "
            "Call us at (02) 8831-7330 or (0960) 471-6968, or email info@d-tec.asia."
        ),
        "keywords": ["contact", "phone", "number", "email", "address", "website", "call", "reach", "visit"],
    },
]
