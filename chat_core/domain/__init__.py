"""领域层模型与异常。

包含：
- models: Turn / SessionState / ErrorInfo 以及请求响应模型。
- exceptions: 传输与业务异常类型定义。
"""
