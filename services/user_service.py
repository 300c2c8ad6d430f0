"""Serviço simples de autenticação e gestão de usuários."""
from __future__ import annotations

from typing import Optional

from passlib.hash import pbkdf2_sha256

from models import User, UserRole
from repositories.base import Repositorio
from services import logging_service


class UserError(RuntimeError):
    pass


class PermissaoNegada(UserError):
    pass


class CredenciaisInvalidas(UserError):
    pass


class UserService:
    def __init__(self, repo: Repositorio):
        self.repo = repo

    # Utilidades -----------------------------------------------------
    @staticmethod
    def hash_password(senha: str) -> str:
        return pbkdf2_sha256.hash(senha)

    @staticmethod
    def verify_password(senha: str, password_hash: str) -> bool:
        return pbkdf2_sha256.verify(senha, password_hash)

    def garantir_admin_padrao(self, senha: str = "admin") -> User:
        admin = self.repo.obter_usuario("admin")
        if admin:
            return admin
        admin = User(
            id=None,
            username="admin",
            password_hash=self.hash_password(senha),
            role=UserRole.ADMIN,
            nome="Administrador",
        )
        return self.repo.salvar_usuario(admin)

    # Autenticação ---------------------------------------------------
    def login(self, username: str, senha: str) -> User:
        usuario = self.repo.obter_usuario(username)
        if not usuario or not self.verify_password(senha, usuario.password_hash):
            raise CredenciaisInvalidas("Usuário ou senha inválidos")
        logging_service.registrar(self.repo, "LOGIN", username, "Login realizado")
        return usuario

    def verificar_permissao(self, usuario: User, roles_permitidos: list[UserRole]) -> None:
        if usuario.role not in roles_permitidos:
            raise PermissaoNegada("Usuário sem permissão para esta operação")

    # Gestão ---------------------------------------------------------
    def criar_usuario(
        self,
        ator: User,
        username: str,
        senha: str,
        role: UserRole = UserRole.COLABORADOR,
        nome: str = "",
        email: Optional[str] = None,
    ) -> User:
        self.verificar_permissao(ator, [UserRole.ADMIN])
        if self.repo.obter_usuario(username):
            raise UserError("Já existe um usuário com esse nome")

        novo = User(
            id=None,
            username=username,
            password_hash=self.hash_password(senha),
            role=role,
            nome=nome,
            email=email,
        )
        self.repo.salvar_usuario(novo)
        logging_service.registrar(
            self.repo, "CRIAR_USUARIO", ator.username, f"Usuario {username} criado com papel {role.value}"
        )
        return novo

    def alterar_senha(self, usuario: User, senha_atual: str, nova_senha: str) -> None:
        atual = self.login(usuario.username, senha_atual)
        atual.password_hash = self.hash_password(nova_senha)
        self.repo.salvar_usuario(atual)
        logging_service.registrar(self.repo, "ALTERAR_SENHA", usuario.username, "Senha alterada")

    def atualizar_perfil(self, usuario: User, nome: str, email: Optional[str] = None) -> User:
        atual = self.repo.obter_usuario(usuario.username)
        if not atual:
            raise UserError("Usuário não encontrado")
        atual.nome = nome.strip()
        atual.email = email
        return self.repo.salvar_usuario(atual)

    def listar(self) -> list[User]:
        return self.repo.listar_usuarios()
