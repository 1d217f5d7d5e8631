"""
用户数据库模型 - 由外部用户服务拥有，本服务只读关联

注意：启动时的建表流程不会创建该表
"""
from sqlalchemy import Column, String, Uuid

from .base import Base


class UserModel(Base):
    """外部 users 表的只读映射"""
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True)
    name = Column(String(200), nullable=True, comment="用户名称")
    email = Column(String(200), nullable=True, comment="邮箱")

    def __repr__(self):
        return f"<UserModel(id={self.id}, name='{self.name}', email='{self.email}')>"
