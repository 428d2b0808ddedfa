from langchain_core.prompts import ChatPromptTemplate

CHAT_SYSTEM_PROMPT = "You are a helpful assistant for construction machine PDFs."

CATEGORY_SYSTEM_PROMPT = "あなたは与えられたリストの中から最も適切なカテゴリ名を返すアシスタントです。"

CATEGORY_USER_PROMPT = """ユーザーが指定した建設機械の種類に最も一致するカテゴリを、以下のリストから1つだけ選んでください。
リスト: {categories}
ユーザー入力: "{vehicle_type}"
カテゴリ名のみを返してください。"""

CHAT_PROMPT = ChatPromptTemplate([
    ("system", CHAT_SYSTEM_PROMPT),
    ("human", "{question}\n\n{context}"),
])

CATEGORY_PROMPT = ChatPromptTemplate([
    ("system", CATEGORY_SYSTEM_PROMPT),
    ("human", CATEGORY_USER_PROMPT),
])
