"""Sample student records loaded into an empty store at startup."""

SAMPLE_STUDENTS = [
    {
        "id": "1001",
        "name": "Rahul Kumar",
        "email": "rahul.kumar@email.com",
        "phone": "9876543210",
        "course": "BCA",
        "semester": "4",
        "gpa": "3.5",
    },
    {
        "id": "1002",
        "name": "Priya Singh",
        "email": "priya.singh@email.com",
        "phone": "8765432109",
        "course": "BCA",
        "semester": "3",
        "gpa": "3.8",
    },
    {
        "id": "1003",
        "name": "Amit Patel",
        "email": "amit.patel@email.com",
        "phone": "7654321098",
        "course": "B.Tech",
        "semester": "5",
        "gpa": "3.2",
    },
]
