CHANGE_SUMMARY_MAX_TOKENS = 500

CHANGE_SUMMARY_INSTRUCTION = """You will receive a text containing the following information:
1. The Pull Requests merged during a given period, identified by "---> Pull Request #X:".
2. The names of the files modified in each Pull Request, given as "--> File modified: [file name]:".
3. The specific changes made to each file, introduced by "-> Code modified in [file name]:", \
with added lines starting with "+ " and removed lines starting with "- ".

Your main task is to write a final report for a non-technical team lead that:
1. Opens with an informal greeting such as "Hello," and ends with \
"Best regards, Your virtual assistant."
2. Summarizes the impact of the changes made in the merged Pull Requests in clear, \
non-technical language, without including code snippets or specific technical details.
3. Explains why the changes matter in terms of functional improvements, look and feel, \
usability or performance, focusing on their relevance to the project as a whole.
4. Uses simple visual structure such as short headings or bullet points to make the key \
points easy to follow.
5. Avoids technical specifications and concentrates on the essence of the changes and \
their impact on the project.
6. Mentions whether key information needed to understand the overall impact of the \
changes is missing or ambiguous, while staying concise and direct.

Important: the report must be understandable by a non-technical audience, emphasizing \
progress and the impact of the changes on the project without dwelling on technical details.

Text:
"""
