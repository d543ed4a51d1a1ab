"""English-to-Korean glossary used when foreign spans are converted or glossed.

Values are noun-like so that a converted word can sit anywhere in a Korean
sentence without breaking the sentence-final ending.
"""

from __future__ import annotations

PHRASES: dict[str, str] = {
    "as soon as possible": "가능한 한 빨리",
    "thank you": "감사",
    "thank you so much": "깊은 감사",
    "thanks a lot": "깊은 감사",
    "no problem": "문제없음",
    "follow up": "후속 확인",
    "follow-up": "후속 확인",
    "end of day": "업무 종료 시각",
    "end of the day": "업무 종료 시각",
    "end of the week": "이번 주말",
    "end of the month": "월말",
    "end of month": "월말",
    "next week": "다음 주",
    "next month": "다음 달",
    "this week": "이번 주",
    "this month": "이번 달",
    "last week": "지난주",
    "last month": "지난달",
    "this morning": "오늘 오전",
    "this afternoon": "오늘 오후",
    "this evening": "오늘 저녁",
    "tomorrow morning": "내일 오전",
    "tomorrow afternoon": "내일 오후",
    "to do": "할 일",
    "to-do": "할 일",
    "action item": "실행 항목",
    "action items": "실행 항목",
    "due date": "마감일",
    "sign up": "가입",
    "log in": "로그인",
    "meeting room": "회의실",
    "conference call": "전화 회의",
    "customer service": "고객 센터",
    "good morning": "아침 인사",
    "best regards": "안부 인사",
}

WORDS: dict[str, str] = {
    "asap": "가능한 한 빨리",
    "eod": "업무 종료 시각",
    "fyi": "참고",
    "tbd": "미정",
    "report": "보고서",
    "reports": "보고서",
    "meeting": "회의",
    "meetings": "회의",
    "email": "이메일",
    "mail": "메일",
    "schedule": "일정",
    "deadline": "마감",
    "file": "파일",
    "files": "파일",
    "attached": "첨부",
    "attachment": "첨부 파일",
    "update": "업데이트",
    "check": "확인",
    "confirm": "확인",
    "confirmation": "확인",
    "please": "부탁",
    "thanks": "감사",
    "team": "팀",
    "project": "프로젝트",
    "feedback": "피드백",
    "review": "검토",
    "document": "문서",
    "documents": "문서",
    "data": "데이터",
    "issue": "이슈",
    "issues": "이슈",
    "request": "요청",
    "support": "지원",
    "contract": "계약",
    "invoice": "청구서",
    "payment": "결제",
    "order": "주문",
    "delivery": "배송",
    "refund": "환불",
    "manager": "매니저",
    "customer": "고객",
    "client": "고객사",
    "send": "전송",
    "share": "공유",
    "cancel": "취소",
    "draft": "초안",
    "agenda": "안건",
    "slide": "슬라이드",
    "slides": "슬라이드",
    "link": "링크",
    "online": "온라인",
    "offline": "오프라인",
    "app": "앱",
    "web": "웹",
    "zoom": "줌",
    "slack": "슬랙",
    "notion": "노션",
    "today": "오늘",
    "tomorrow": "내일",
    "tonight": "오늘 밤",
    "morning": "오전",
    "afternoon": "오후",
    "evening": "저녁",
    "noon": "정오",
    "midnight": "자정",
    "weekend": "주말",
    "week": "주",
    "month": "달",
    "january": "1월",
    "february": "2월",
    "april": "4월",
    "june": "6월",
    "july": "7월",
    "august": "8월",
    "september": "9월",
    "october": "10월",
    "november": "11월",
    "december": "12월",
    "monday": "월요일",
    "tuesday": "화요일",
    "wednesday": "수요일",
    "thursday": "목요일",
    "friday": "금요일",
    "saturday": "토요일",
    "sunday": "일요일",
    "am": "오전",
    "pm": "오후",
    "penalty": "위약금",
    "legal": "법적",
    "lawsuit": "소송",
    "sorry": "사과",
    "ok": "확인",
    "okay": "확인",
    "hello": "안부 인사",
    "hi": "안부 인사",
    "event": "행사",
    "notice": "공지",
    "homework": "숙제",
    "class": "수업",
    "school": "학교",
    "teacher": "선생님",
    "password": "비밀번호",
    "account": "계정",
    "version": "버전",
    "test": "테스트",
}

STOPWORDS: frozenset[str] = frozenset({
    "a", "an", "the", "to", "of", "and", "or", "by", "for", "in", "on", "at",
    "with", "is", "are", "be", "it", "this", "that", "me", "my", "your", "you",
    "i", "we", "our", "us", "can", "could", "would", "will", "do", "so",
})

LETTERS: dict[str, str] = {
    "a": "에이", "b": "비", "c": "씨", "d": "디", "e": "이", "f": "에프",
    "g": "지", "h": "에이치", "i": "아이", "j": "제이", "k": "케이", "l": "엘",
    "m": "엠", "n": "엔", "o": "오", "p": "피", "q": "큐", "r": "알",
    "s": "에스", "t": "티", "u": "유", "v": "브이", "w": "더블유", "x": "엑스",
    "y": "와이", "z": "지",
}
